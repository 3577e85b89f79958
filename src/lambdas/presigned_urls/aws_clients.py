import os, boto3
from botocore.client import Config

def _region() -> str:
    return os.environ.get("AWS_REGION") or os.environ.get("AWS_DEFAULT_REGION") or "us-east-1"

def _kwargs(endpoint_var: str) -> dict:
    kwargs = {"region_name": _region()}
    ep = os.environ.get(endpoint_var)
    if ep: kwargs["endpoint_url"] = ep
    return kwargs

def s3():
    # presigned urls must be SigV4 so ExpiresIn is honoured up to 7 days
    return boto3.client("s3", config=Config(signature_version="s3v4"), **_kwargs("AWS_ENDPOINT_URL_S3"))

def ledger_table(name: str):
    return boto3.resource("dynamodb", **_kwargs("AWS_ENDPOINT_URL_DYNAMODB")).Table(name)

def sns():
    return boto3.client("sns", **_kwargs("AWS_ENDPOINT_URL_SNS"))
