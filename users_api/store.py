import boto3
from botocore.exceptions import BotoCoreError, ClientError
from functools import lru_cache
from typing import Dict, Any
import logging
import os

# LocalStack by default; set DYNAMODB_ENDPOINT="" to talk to real AWS
TABLE_NAME = os.getenv("USERS_TABLE", "Users")
REGION = os.getenv("AWS_REGION", "us-east-1")
ENDPOINT_URL = os.getenv("DYNAMODB_ENDPOINT", "http://localhost:4566")

StoreError = (ClientError, BotoCoreError)

def log_level() -> int:
    """LOG_LEVEL as a logging level, INFO when unset or unknown."""
    level = logging.getLevelName(os.getenv("LOG_LEVEL", "INFO").upper())
    return level if isinstance(level, int) else logging.INFO

@lru_cache(maxsize=None)
def get_table():
    """Return the Users table resource, created once per process."""
    dynamodb = boto3.resource(
        "dynamodb",
        region_name=REGION,
        endpoint_url=ENDPOINT_URL or None,
    )
    return dynamodb.Table(TABLE_NAME)

def serialize_error(error: Exception) -> Dict[str, Any]:
    if isinstance(error, ClientError):
        err = error.response.get("Error", {})
        meta = error.response.get("ResponseMetadata", {})
        payload = {
            "message": err.get("Message", str(error)),
            "code": err.get("Code", type(error).__name__),
        }
        if "HTTPStatusCode" in meta:
            payload["statusCode"] = meta["HTTPStatusCode"]
        if "RequestId" in meta:
            payload["requestId"] = meta["RequestId"]
        return payload
    return {"message": str(error), "code": type(error).__name__}
