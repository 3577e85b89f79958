import json
import logging
from typing import List, Optional

# import modules (so tests can monkeypatch attributes)
from . import aws_clients
from src.models.config import PresignConfig
from src.models.upload import parse_s3_event, to_json
from src.services.errors import PresignError
from src.services.ledger import DynamoDBRecordStore
from src.services.notifier import SNSPublisher
from src.services.pipeline import UploadPipeline
from src.services.url_issuer import S3URLIssuer

logger = logging.getLogger()
logger.setLevel(logging.INFO)

_CONFIG: Optional[PresignConfig] = None


def _config() -> PresignConfig:
    # validated on the first invocation of the container, then reused
    global _CONFIG
    if _CONFIG is None:
        _CONFIG = PresignConfig.from_env()
        logger.info("Loaded config: ttl=%ds table=%s", _CONFIG.ttl_seconds, _CONFIG.table_name)
    return _CONFIG


def build_pipeline(config: PresignConfig) -> UploadPipeline:
    # fresh clients per invocation; nothing is shared between events
    return UploadPipeline(
        config,
        issuer=S3URLIssuer(aws_clients.s3(), config.ttl_seconds),
        store=DynamoDBRecordStore(aws_clients.ledger_table(config.table_name)),
        publisher=SNSPublisher(aws_clients.sns(), config.topic_arn),
    )


def lambda_handler(event, context):
    """
    Triggered by s3:ObjectCreated:* on the watched bucket.

    For every created object: presign a GET url, upsert the ledger row keyed by
    object name, then publish the url to the SNS topic. Uploads in one envelope
    are independent: a failing record does not stop the others. After all of
    them ran, the first failure is raised so the invocation is reported as
    failed and S3's async retry policy applies.
    """
    logger.info("Received event: %s", json.dumps(event, default=str))

    try:
        config = _config()
        uploads = parse_s3_event(event)
    except (PresignError, ValueError) as e:
        logger.error("Rejected event before processing: %s", e, exc_info=True)
        raise

    pipeline = build_pipeline(config)

    processed = []
    failures: List[PresignError] = []
    for upload in uploads:
        try:
            result = pipeline.handle(upload)
        except PresignError as e:
            logger.error("Failed to process %s: %s", upload.uri, e, exc_info=True)
            failures.append(e)
            continue
        logger.info("Processed upload: %s", to_json(result.record))
        processed.append(result.to_dict())

    if failures:
        logger.error("%d of %d uploads failed", len(failures), len(uploads))
        raise failures[0]

    return {"status": "OK", "processed": processed}
