# src/services/url_issuer.py
from __future__ import annotations

import logging
import time
from typing import Any, Callable, Protocol

from botocore.exceptions import BotoCoreError, ClientError

from src.models.upload import IssuedURL, UploadEvent
from src.services.errors import IssuanceError

logger = logging.getLogger(__name__)


class URLIssuer(Protocol):
    def issue(self, upload: UploadEvent) -> IssuedURL: ...


class S3URLIssuer:
    """
    Issues presigned GET urls for uploaded objects.

    The expiration instant is computed from the issuance clock plus the
    configured ttl and returned next to the url; the signed string itself
    is treated as opaque.
    """

    def __init__(
        self,
        s3_client: Any,
        ttl_seconds: int,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._s3 = s3_client
        self._ttl = ttl_seconds
        self._clock = clock

    def _ensure_exists(self, upload: UploadEvent) -> None:
        try:
            self._s3.head_object(Bucket=upload.bucket, Key=upload.key)
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code", "")
            if code in ("404", "NoSuchKey", "NotFound"):
                raise IssuanceError(f"Object does not exist: {upload.uri}") from e
            if code in ("403", "AccessDenied", "Forbidden"):
                raise IssuanceError(f"Access denied reading {upload.uri}") from e
            raise IssuanceError(f"Failed to look up {upload.uri}: {e}") from e
        except BotoCoreError as e:
            raise IssuanceError(f"Failed to look up {upload.uri}: {e}") from e

    def issue(self, upload: UploadEvent) -> IssuedURL:
        if not upload.bucket or not upload.key:
            raise IssuanceError("bucket and key must be non-empty")
        if not isinstance(self._ttl, int) or self._ttl <= 0:
            raise IssuanceError(f"ttl_seconds must be a positive integer, got {self._ttl!r}")

        self._ensure_exists(upload)

        issued_at = int(self._clock())
        try:
            url = self._s3.generate_presigned_url(
                "get_object",
                Params={"Bucket": upload.bucket, "Key": upload.key},
                ExpiresIn=self._ttl,
                HttpMethod="GET",
            )
        except (ClientError, BotoCoreError) as e:
            raise IssuanceError(f"Failed to presign {upload.uri}: {e}") from e

        issued = IssuedURL(url=url, issued_at_epoch=issued_at, expires_at_epoch=issued_at + self._ttl)
        logger.info("Issued presigned URL for %s (expires at %d)", upload.uri, issued.expires_at_epoch)
        return issued


__all__ = ["URLIssuer", "S3URLIssuer"]
