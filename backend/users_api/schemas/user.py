"""User Schemas — response contracts for the users endpoints (OpenAPI docs).

Invariants:
    - Stored documents are returned as-is (after serialize_user), so records allow extra keys
    - ErrorResponse mirrors UsersApiError.to_response()

Design Decisions:
    - Request bodies are not declared as Pydantic models: they may arrive re-encoded
      as a JSON string and only presence is checked (see core/user_documents.py)
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class UserRecord(BaseModel):
    """A stored user as returned by GET."""
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str = Field(alias="_id")
    name: str | None = None
    email: str | None = None
    password: str | None = None
    age: int | float | None = None
    role: str | None = None
    created_at: datetime | None = Field(None, alias="createdAt")
    updated_at: datetime | None = Field(None, alias="updatedAt")


class MessageResponse(BaseModel):
    """Confirmation returned by update and delete."""
    message: str


class ErrorResponse(BaseModel):
    """Error envelope for every non-2xx response."""
    error: str
    details: str | None = None
