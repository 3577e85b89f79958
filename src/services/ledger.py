# src/services/ledger.py
from __future__ import annotations

import logging
from datetime import tzinfo
from typing import Any, Dict, Protocol

from botocore.exceptions import BotoCoreError, ClientError

from src.models.upload import IssuedURL, UploadEvent, UploadRecord, format_timestamp
from src.services.errors import PersistenceError

logger = logging.getLogger(__name__)


# Build the ledger row from the upload and the url issued for it
def build_record(upload: UploadEvent, issued: IssuedURL, tz: tzinfo) -> UploadRecord:
    return UploadRecord(
        object_name=upload.key,
        creation_time=format_timestamp(issued.issued_at_epoch, tz),
        expiration_time=format_timestamp(issued.expires_at_epoch, tz),
        url=issued.url,
        object_uri=upload.uri,
        bucket=upload.bucket,
        expiration_epoch=issued.expires_at_epoch,
    )


# Map a record onto the table's attribute names (Object_name is the hash key)
def to_item(record: UploadRecord) -> Dict[str, Any]:
    return {
        "Object_name": record.object_name,
        "Creation_time": record.creation_time,
        "Expiration_time": record.expiration_time,
        "URL": record.url,
        "S3_URI": record.object_uri,
        "Bucket": record.bucket,
        "Expiration_epoch": record.expiration_epoch,
    }


class RecordStore(Protocol):
    def put(self, record: UploadRecord) -> None: ...


class DynamoDBRecordStore:
    """Writes upload records with a single unconditional put (last writer wins)."""

    def __init__(self, table: Any) -> None:
        self._table = table

    def put(self, record: UploadRecord) -> None:
        try:
            self._table.put_item(Item=to_item(record))
        except (ClientError, BotoCoreError) as e:
            raise PersistenceError(
                f"Failed to record {record.object_uri} in {getattr(self._table, 'name', 'ledger')}: {e}",
                record=record,
            ) from e
        logger.info("Recorded %s in ledger", record.object_name)


__all__ = ["RecordStore", "DynamoDBRecordStore", "build_record", "to_item"]
