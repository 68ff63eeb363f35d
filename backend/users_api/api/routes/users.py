"""Users Routes — CRUD over the users collection, one store call per handler.

Invariants:
    - Every handler acquires the shared handle via get_db (connects on first use)
    - Every handler performs exactly one document-store operation
    - Driver errors (PyMongoError) become DatabaseError with the driver text in details
    - Malformed path ids surface as 500 (InvalidIdentifierError)
    - PUT with values identical to the stored ones responds 404

Design Decisions:
    - Bodies read raw and decoded by core/user_documents (string-encoded JSON accepted)
    - Errors raised, not returned: the global handlers in error_handlers.py
      own the response envelope and log each failure once
    - The create echo lets client-sent keys (including _id) override the assigned id
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request, status
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from users_api.config import get_settings
from users_api.core.domain_types import ID_FIELD
from users_api.core.errors import DatabaseError, UserNotFoundError
from users_api.core.user_documents import (
    build_update_fields,
    build_update_filter,
    build_user_document,
    decode_body,
    parse_user_id,
    require_fields,
    serialize_user,
)
from users_api.infrastructure.database import get_db
from users_api.schemas.user import ErrorResponse, MessageResponse, UserRecord

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/users", tags=["users"])

_ERRORS = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def _users(db: AsyncDatabase) -> AsyncCollection:
    return db[get_settings().users_collection]


def _now() -> datetime:
    return datetime.now(timezone.utc)


@router.post(
    "", status_code=status.HTTP_201_CREATED,
    responses={201: {"model": UserRecord}, **_ERRORS},
)
async def create_user(
    request: Request, db: AsyncDatabase = Depends(get_db),
):
    """Create a user. name, email, password, age and role are required."""
    body = decode_body(await request.body())
    require_fields(body)
    try:
        result = await _users(db).insert_one(build_user_document(body, _now()))
    except PyMongoError as e:
        raise DatabaseError("Internal server error", "insert", str(e)) from e

    user_id = str(result.inserted_id)
    logger.info("User created", extra={"user_id": user_id})
    return {ID_FIELD: user_id, **body}


@router.get("", responses=_ERRORS)
async def list_users(db: AsyncDatabase = Depends(get_db)):
    """Return every user in store order. Unbounded."""
    try:
        users = await _users(db).find({}).to_list(None)
    except PyMongoError as e:
        raise DatabaseError("Error fetching users", "find", str(e)) from e
    return serialize_user(users)


@router.get("/{user_id}", responses={200: {"model": UserRecord}, **_ERRORS})
async def get_user(
    user_id: str, db: AsyncDatabase = Depends(get_db),
):
    object_id = parse_user_id(user_id, "Error fetching user")
    try:
        user = await _users(db).find_one({ID_FIELD: object_id})
    except PyMongoError as e:
        raise DatabaseError("Error fetching user", "find_one", str(e)) from e
    if not user:
        raise UserNotFoundError(user_id)
    return serialize_user(user)


@router.put(
    "/{user_id}", response_model=MessageResponse, responses=_ERRORS,
)
async def update_user(
    user_id: str, request: Request, db: AsyncDatabase = Depends(get_db),
):
    """Overwrite all five fields and set updatedAt.

    Responds 404 when nothing was modified, including the case where the
    user exists but already holds identical values.
    """
    object_id = parse_user_id(user_id, "Error updating user")
    body = decode_body(await request.body())
    fields = build_update_fields(body, _now())
    try:
        result = await _users(db).update_one(
            build_update_filter(object_id, fields), {"$set": fields},
        )
    except PyMongoError as e:
        raise DatabaseError("Error updating user", "update_one", str(e)) from e
    if result.modified_count == 0:
        raise UserNotFoundError(user_id)
    logger.info("User updated", extra={"user_id": user_id})
    return MessageResponse(message="User updated successfully")


@router.delete(
    "/{user_id}", response_model=MessageResponse, responses=_ERRORS,
)
async def delete_user(user_id: str, db: AsyncDatabase = Depends(get_db)):
    object_id = parse_user_id(user_id, "Error deleting user")
    try:
        result = await _users(db).delete_one({ID_FIELD: object_id})
    except PyMongoError as e:
        raise DatabaseError("Error deleting user", "delete_one", str(e)) from e
    if result.deleted_count == 0:
        raise UserNotFoundError(user_id)
    logger.info("User deleted", extra={"user_id": user_id})
    return MessageResponse(message="User deleted successfully")
