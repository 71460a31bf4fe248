from boto3.dynamodb.types import Binary
from pydantic import BaseModel, ValidationError
from decimal import Decimal, DecimalException
from typing import Dict, Any, Optional
import base64
import json
import logging
from users_api.store import StoreError, get_table, log_level, serialize_error

logger = logging.getLogger(__name__)

ALLOWED_METHODS = ("GET", "POST")
JSON_HEADERS = {"Content-Type": "application/json"}

class UserRecord(BaseModel):
    # Fields are passed through to the store as-is
    userId: Any = None
    name: Any = None
    email: Any = None

def _json_default(value):
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, Binary):
        return base64.b64encode(value.value).decode()
    if isinstance(value, (set, frozenset)):
        return list(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")

def _reject_constant(name):
    # NaN and Infinity have no DynamoDB number representation
    raise ValueError(f"Unsupported JSON constant {name}")

def _resp(status: int, body: str, headers: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
    resp = {"statusCode": status, "body": body}
    if headers:
        resp["headers"] = headers
    return resp

def _json_resp(status: int, payload, headers: Optional[Dict[str, str]] = None):
    return _resp(status, json.dumps(payload, default=_json_default), {**JSON_HEADERS, **(headers or {})})

def get_user(table, user_id) -> Dict[str, Any]:
    try:
        item = table.get_item(Key={"userId": user_id}).get("Item")
    except StoreError as e:
        logger.error(f"Failed to read user {user_id!r}: {e}")
        return _json_resp(500, serialize_error(e))
    if item is None:
        # Not-found is reported as an empty 200
        logger.info(f"User {user_id!r} not found")
        return _resp(200, "")
    return _json_resp(200, item)

def put_user(table, body: Optional[str]) -> Dict[str, Any]:
    try:
        payload = json.loads(body or "{}", parse_float=Decimal, parse_constant=_reject_constant)
        record = UserRecord.model_validate(payload)
    except (ValueError, ValidationError) as e:
        logger.warning(f"Rejected request body: {e}")
        return _json_resp(400, {"message": "Request body must be a JSON object"})

    item = record.model_dump(exclude_none=True)
    try:
        table.put_item(Item=item)
    except StoreError + (DecimalException,) as e:
        logger.error(f"Failed to write user {item.get('userId')!r}: {e}")
        return _json_resp(500, serialize_error(e))
    logger.info(f"Stored user {item.get('userId')!r}")
    return _resp(200, "User created successfully")

def dispatch(event: Dict[str, Any], table) -> Dict[str, Any]:
    """Handle one proxy event with a single read or write against `table`."""
    method = (event.get("httpMethod") or "").upper()

    if method == "GET":
        path_params = event.get("pathParameters") or {}
        return get_user(table, path_params.get("userId"))
    elif method == "POST":
        return put_user(table, event.get("body"))

    logger.warning(f"Unsupported method {method!r}")
    return _json_resp(
        405,
        {"message": f"Method {method or '<none>'} not allowed"},
        {"Allow": ", ".join(ALLOWED_METHODS)},
    )

def handler(event, context):
    """AWS Lambda entry point for API Gateway proxy integration."""
    logging.getLogger().setLevel(log_level())
    return dispatch(event, get_table())
