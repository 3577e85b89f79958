from datetime import timezone

import pytest

from src.models.config import PresignConfig, DEFAULT_TABLE_NAME, DEFAULT_SUBJECT
from src.services.errors import ConfigurationError

TOPIC = "arn:aws:sns:us-east-1:123456789012:uploads"


def test_from_env_defaults():
    cfg = PresignConfig.from_env({"URL_EXPIRATION_TIME": "604800", "TOPIC_ARN": TOPIC})
    assert cfg.ttl_seconds == 604800
    assert cfg.topic_arn == TOPIC
    assert cfg.table_name == DEFAULT_TABLE_NAME
    assert cfg.subject == DEFAULT_SUBJECT
    assert cfg.tz is timezone.utc


def test_from_env_overrides():
    cfg = PresignConfig.from_env({
        "URL_EXPIRATION_TIME": " 3600 ",
        "TOPIC_ARN": TOPIC,
        "TABLE_NAME": "ledger",
        "NOTIFICATION_SUBJECT": "New download link",
        "TIMESTAMP_TIMEZONE": "Europe/Madrid",
    })
    assert cfg.ttl_seconds == 3600
    assert cfg.table_name == "ledger"
    assert cfg.subject == "New download link"
    assert str(cfg.tz) == "Europe/Madrid"


@pytest.mark.parametrize("ttl", [None, "", "abc", "0", "-5", "1.5", "604801"])
def test_from_env_rejects_bad_ttl(ttl):
    env = {"TOPIC_ARN": TOPIC}
    if ttl is not None:
        env["URL_EXPIRATION_TIME"] = ttl
    with pytest.raises(ConfigurationError):
        PresignConfig.from_env(env)


def test_from_env_requires_topic():
    with pytest.raises(ConfigurationError, match="TOPIC_ARN"):
        PresignConfig.from_env({"URL_EXPIRATION_TIME": "60"})


def test_unknown_timezone_is_rejected():
    with pytest.raises(ConfigurationError, match="TIMESTAMP_TIMEZONE"):
        PresignConfig.from_env({"URL_EXPIRATION_TIME": "60", "TOPIC_ARN": TOPIC,
                                "TIMESTAMP_TIMEZONE": "Mars/Olympus_Mons"})


def test_direct_construction_validates_ttl():
    with pytest.raises(ConfigurationError):
        PresignConfig(ttl_seconds=0, topic_arn=TOPIC)
    with pytest.raises(ConfigurationError):
        PresignConfig(ttl_seconds=True, topic_arn=TOPIC)
