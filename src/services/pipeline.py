# src/services/pipeline.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict

from src.models.config import PresignConfig
from src.models.upload import NotificationMessage, UploadEvent, UploadRecord, to_dict as dataclass_to_dict
from src.services.errors import DispatchError
from src.services.ledger import RecordStore, build_record
from src.services.notifier import Publisher, format_notification
from src.services.url_issuer import URLIssuer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InvocationResult:
    record: UploadRecord
    message: NotificationMessage
    message_id: str

    def to_dict(self) -> Dict[str, Any]:
        out = dataclass_to_dict(self.record)
        out["message_id"] = self.message_id
        return out


class UploadPipeline:
    """
    Issue -> Record -> Dispatch for one upload.

    Each stage only runs once the previous one succeeded, so every published
    notification has a ledger row behind it. A failed publish leaves the row
    in place.
    """

    def __init__(
        self,
        config: PresignConfig,
        issuer: URLIssuer,
        store: RecordStore,
        publisher: Publisher,
    ) -> None:
        self._config = config
        self._issuer = issuer
        self._store = store
        self._publisher = publisher

    def handle(self, upload: UploadEvent) -> InvocationResult:
        issued = self._issuer.issue(upload)

        record = build_record(upload, issued, self._config.tz)
        self._store.put(record)

        message = format_notification(record, self._config.subject, self._config.timezone_name)
        try:
            message_id = self._publisher.publish(message)
        except DispatchError as e:
            e.record = record
            logger.error("Notification for %s failed; ledger entry kept", record.object_uri)
            raise

        return InvocationResult(record=record, message=message, message_id=message_id)


__all__ = ["UploadPipeline", "InvocationResult"]
