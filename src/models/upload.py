# src/models/upload.py
from __future__ import annotations

from dataclasses import dataclass, asdict
from datetime import datetime, tzinfo
from typing import Any, Dict, List
from urllib.parse import unquote_plus
import json
import logging

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d, %H:%M:%S"


# One object-creation event, as delivered by the bucket notification
@dataclass(frozen=True)
class UploadEvent:
    bucket: str
    key: str

    @property
    def uri(self) -> str:
        return f"s3://{self.bucket}/{self.key}"


# Presigned GET url plus the instant it stops working
@dataclass(frozen=True)
class IssuedURL:
    url: str
    issued_at_epoch: int
    expires_at_epoch: int   # issued_at_epoch + ttl, never parsed out of url


# Ledger row, one per object name (later uploads overwrite)
@dataclass(frozen=True)
class UploadRecord:
    object_name: str
    creation_time: str       # TIMESTAMP_FORMAT in the configured zone
    expiration_time: str
    url: str
    object_uri: str          # s3://bucket/key
    bucket: str = ""
    expiration_epoch: int = 0


@dataclass(frozen=True)
class NotificationMessage:
    subject: str
    body: str


def format_timestamp(epoch: int, tz: tzinfo) -> str:
    """Render an epoch as the human-readable ledger timestamp."""
    return datetime.fromtimestamp(epoch, tz).strftime(TIMESTAMP_FORMAT)


def _from_record(rec: Dict[str, Any]) -> UploadEvent:
    s3 = rec.get("s3") or {}
    bucket = (s3.get("bucket") or {}).get("name")
    key = (s3.get("object") or {}).get("key")
    if not bucket or not key:
        raise ValueError("S3 record is missing bucket name or object key")
    # keys arrive url-encoded ('+' for spaces)
    return UploadEvent(bucket=bucket, key=unquote_plus(key))


def parse_s3_event(event: Dict[str, Any]) -> List[UploadEvent]:
    """
    Normalize an inbound event into upload descriptors.

    Accepts either the S3 notification envelope
      {"Records": [{"eventName": "ObjectCreated:Put", "s3": {"bucket": {"name": ...},
                                                            "object": {"key": ...}}}]}
    or a bare descriptor {"bucket": ..., "key": ...} (handy for manual invokes).
    Records that are not ObjectCreated events are skipped.
    """
    if not isinstance(event, dict):
        raise ValueError(f"unsupported event type: {type(event).__name__}")

    if "Records" not in event:
        bucket, key = event.get("bucket"), event.get("key")
        if not bucket or not key:
            raise ValueError("event must carry 'Records' or both 'bucket' and 'key'")
        return [UploadEvent(bucket=bucket, key=key)]

    uploads: List[UploadEvent] = []
    for rec in event.get("Records") or []:
        if not isinstance(rec, dict):
            raise ValueError(f"unsupported record type: {type(rec).__name__}")
        name = str(rec.get("eventName") or "ObjectCreated:Put")
        if not name.startswith("ObjectCreated:"):
            logger.info("Skipping non-creation record: %s", name)
            continue
        uploads.append(_from_record(rec))

    if not uploads:
        raise ValueError("event contained no ObjectCreated records")
    return uploads


# dataclass -> plain dict (ledger rows, handler results)
def to_dict(obj: Any) -> Dict[str, Any]:
    return asdict(obj)


# dataclass -> JSON, compact unless pretty (used for log lines)
def to_json(obj: Any, pretty: bool = False) -> str:
    if pretty:
        return json.dumps(asdict(obj), ensure_ascii=False, indent=2)
    return json.dumps(asdict(obj), ensure_ascii=False, separators=(",", ":"))


__all__ = [
    "UploadEvent",
    "IssuedURL",
    "UploadRecord",
    "NotificationMessage",
    "TIMESTAMP_FORMAT",
    "format_timestamp",
    "parse_s3_event",
    "to_dict",
    "to_json",
]
