# src/services/notifier.py
from __future__ import annotations

import logging
from typing import Any, Protocol

from botocore.exceptions import BotoCoreError, ClientError

from src.models.upload import NotificationMessage, UploadRecord
from src.services.errors import DispatchError

logger = logging.getLogger(__name__)


def format_notification(record: UploadRecord, subject: str, tz_label: str = "UTC") -> NotificationMessage:
    """Fixed plain-text template; the email subscription renders it as-is."""
    body = f"File: {record.object_name}. Expires: {record.expiration_time} ({tz_label}). URL: {record.url}"
    return NotificationMessage(subject=subject, body=body)


class Publisher(Protocol):
    def publish(self, message: NotificationMessage) -> str: ...


class SNSPublisher:
    def __init__(self, sns_client: Any, topic_arn: str) -> None:
        self._sns = sns_client
        self._topic_arn = topic_arn

    def publish(self, message: NotificationMessage) -> str:
        try:
            resp = self._sns.publish(
                TopicArn=self._topic_arn,
                Subject=message.subject,
                Message=message.body,
            )
        except (ClientError, BotoCoreError) as e:
            raise DispatchError(f"Failed to publish to {self._topic_arn}: {e}") from e
        message_id = resp.get("MessageId", "")
        logger.info("Published notification %s to %s", message_id, self._topic_arn)
        return message_id


__all__ = ["Publisher", "SNSPublisher", "format_notification"]
