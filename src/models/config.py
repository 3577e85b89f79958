# src/models/config.py
from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import timezone, tzinfo
from typing import Mapping, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from src.services.errors import ConfigurationError

DEFAULT_TABLE_NAME = "S3_Objects_Presigned_URLs"
DEFAULT_SUBJECT = "URL ready"
DEFAULT_TIMEZONE = "UTC"
# SigV4 presigned URLs are capped at one week
MAX_TTL_SECONDS = 604800


def _parse_ttl(raw: Optional[str]) -> int:
    if raw is None or not str(raw).strip():
        raise ConfigurationError("URL_EXPIRATION_TIME env var is required")
    try:
        ttl = int(str(raw).strip())
    except ValueError as e:
        raise ConfigurationError(f"URL_EXPIRATION_TIME must be an integer, got {raw!r}") from e
    if ttl <= 0:
        raise ConfigurationError(f"URL_EXPIRATION_TIME must be positive, got {ttl}")
    if ttl > MAX_TTL_SECONDS:
        raise ConfigurationError(
            f"URL_EXPIRATION_TIME must be at most {MAX_TTL_SECONDS} seconds, got {ttl}"
        )
    return ttl


def _parse_zone(name: str) -> tzinfo:
    if name.upper() == "UTC":
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ConfigurationError(f"TIMESTAMP_TIMEZONE is not a known zone: {name!r}") from e


@dataclass(frozen=True)
class PresignConfig:
    """Handler settings, validated once when the container starts."""
    ttl_seconds: int
    topic_arn: str
    table_name: str = DEFAULT_TABLE_NAME
    subject: str = DEFAULT_SUBJECT
    timezone_name: str = DEFAULT_TIMEZONE

    def __post_init__(self) -> None:
        if not isinstance(self.ttl_seconds, int) or isinstance(self.ttl_seconds, bool):
            raise ConfigurationError("ttl_seconds must be an int")
        if not 0 < self.ttl_seconds <= MAX_TTL_SECONDS:
            raise ConfigurationError(f"ttl_seconds out of range: {self.ttl_seconds}")
        if not self.topic_arn:
            raise ConfigurationError("TOPIC_ARN env var is required")
        if not self.table_name:
            raise ConfigurationError("TABLE_NAME must not be empty")
        _parse_zone(self.timezone_name)

    @property
    def tz(self) -> tzinfo:
        return _parse_zone(self.timezone_name)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "PresignConfig":
        env = os.environ if environ is None else environ
        return cls(
            ttl_seconds=_parse_ttl(env.get("URL_EXPIRATION_TIME")),
            topic_arn=env.get("TOPIC_ARN", "").strip(),
            table_name=env.get("TABLE_NAME", DEFAULT_TABLE_NAME).strip(),
            subject=env.get("NOTIFICATION_SUBJECT", DEFAULT_SUBJECT),
            timezone_name=env.get("TIMESTAMP_TIMEZONE", DEFAULT_TIMEZONE).strip() or DEFAULT_TIMEZONE,
        )


__all__ = ["PresignConfig", "MAX_TTL_SECONDS", "DEFAULT_TABLE_NAME", "DEFAULT_SUBJECT"]
