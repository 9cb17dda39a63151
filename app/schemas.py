from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ArticleCreate(BaseModel):
    """
    Body of POST /api/articles.
    Fields are optional at this layer so that missing values reach the Article
    entity's validation and come back as a 400 rather than a schema error.
    """
    title: Optional[str] = None
    content: Optional[str] = None


class ArticleUpdate(BaseModel):
    """Body of PUT /api/articles/{id}: only the fields actually sent are applied."""
    title: Optional[str] = None
    content: Optional[str] = None


class ArticleResponse(BaseModel):
    """Shape returned for a single article."""
    id: str
    title: str
    content: str
    created_at: datetime = Field(serialization_alias="createdAt")
    updated_at: datetime = Field(serialization_alias="updatedAt")

    # Allows Pydantic to read data directly from SQLAlchemy model instances
    model_config = ConfigDict(from_attributes=True)

    @field_validator("created_at", "updated_at")
    @classmethod
    def assume_utc(cls, value: datetime) -> datetime:
        # SQLite hands timestamps back without tzinfo; they were written as UTC
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class MessageResponse(BaseModel):
    message: str


class LoginRequest(BaseModel):
    # Any JSON value is accepted; AuthGate.login rejects anything but the exact password
    password: Any = None


class LoginResponse(BaseModel):
    success: bool
    token: Optional[str] = None
    error: Optional[str] = None


class AuthStatus(BaseModel):
    authenticated: bool
