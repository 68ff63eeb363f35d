"""User Documents — pure mapping between request payloads and stored documents.

Invariants:
    - Presence follows JS truthiness: "", 0, NaN, false and null count as missing;
      empty lists and objects count as present
    - Missing fields reported in REQUIRED_FIELDS order, every one of them
    - age stored as a number (int when integral) or None when not coercible
    - serialize_user output is JSON-safe (ObjectId -> str, datetime -> ISO-8601)

Design Decisions:
    - Body decoded here, not by FastAPI: API Gateway may deliver the JSON object
      re-encoded as a JSON string, so one extra decode pass is allowed
    - Decode failures raise MalformedBodyError (400), distinct from MissingFieldsError
    - Timestamps passed in by the caller: functions stay deterministic
"""

import json
import math
from datetime import datetime
from typing import Any

from bson import ObjectId
from bson.errors import InvalidId

from users_api.core.domain_types import (
    CREATED_AT_FIELD, REQUIRED_FIELDS, UPDATED_AT_FIELD,
)
from users_api.core.errors import (
    InvalidIdentifierError, MalformedBodyError, MissingFieldsError,
)


def decode_body(raw: bytes | str) -> dict[str, Any]:
    """Decode a request body into a dict. Empty body decodes to {}."""
    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedBodyError(str(e)) from e
    if not raw.strip():
        return {}
    try:
        body = json.loads(raw)
        if isinstance(body, str):
            body = json.loads(body)
    except (json.JSONDecodeError, RecursionError) as e:
        raise MalformedBodyError(str(e)) from e
    if not isinstance(body, dict):
        raise MalformedBodyError(
            f"Expected a JSON object, got {type(body).__name__}",
        )
    return body


def is_present(value: Any) -> bool:
    if value is None or isinstance(value, bool):
        return bool(value)
    if isinstance(value, (int, float)):
        return value != 0 and not math.isnan(value)
    if isinstance(value, str):
        return value != ""
    return True


def find_missing_fields(body: dict[str, Any]) -> list[str]:
    return [f for f in REQUIRED_FIELDS if not is_present(body.get(f))]


def require_fields(body: dict[str, Any]) -> None:
    """Raise MissingFieldsError listing every absent required field."""
    missing = find_missing_fields(body)
    if missing:
        raise MissingFieldsError(missing)


def coerce_age(value: Any) -> int | float | None:
    """Numeric coercion for age. Non-numeric input yields None."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return 0
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(number):
        return None
    return int(number) if number.is_integer() else number


def build_user_document(body: dict[str, Any], now: datetime) -> dict[str, Any]:
    """Document inserted on create — only the five fields plus createdAt."""
    return {
        "name": body["name"],
        "email": body["email"],
        "password": body["password"],
        "age": coerce_age(body["age"]),
        "role": body["role"],
        CREATED_AT_FIELD: now,
    }


def build_update_fields(body: dict[str, Any], now: datetime) -> dict[str, Any]:
    """$set payload for update — all five fields overwritten together."""
    return {
        "name": body.get("name"),
        "email": body.get("email"),
        "password": body.get("password"),
        "age": coerce_age(body.get("age")),
        "role": body.get("role"),
        UPDATED_AT_FIELD: now,
    }


def parse_user_id(raw_id: str, error_message: str) -> ObjectId:
    """Parse a path identifier. Malformed ids raise InvalidIdentifierError."""
    try:
        return ObjectId(raw_id)
    except (InvalidId, TypeError) as e:
        raise InvalidIdentifierError(raw_id, error_message, str(e)) from e


def serialize_user(document: Any) -> Any:
    """Make a stored document JSON-safe, recursively."""
    if isinstance(document, ObjectId):
        return str(document)
    if isinstance(document, datetime):
        return document.isoformat()
    if isinstance(document, dict):
        return {k: serialize_user(v) for k, v in document.items()}
    if isinstance(document, (list, tuple)):
        return [serialize_user(v) for v in document]
    return document


def build_update_filter(user_id: ObjectId, fields: dict[str, Any]) -> dict[str, Any]:
    """Match the user only when at least one stored value differs.

    updatedAt is excluded from the comparison, so re-sending identical values
    matches nothing and modified_count stays 0.
    """
    return {
        "_id": user_id,
        "$or": [
            {k: {"$ne": v}} for k, v in fields.items() if k != UPDATED_AT_FIELD
        ],
    }
