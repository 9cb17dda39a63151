import uuid
from datetime import datetime, timezone
from typing import Any, Mapping

from sqlalchemy import Column, DateTime, String, Text

from app.database import Base
from app.errors import ValidationError

# Fields a client may set; id and timestamps are owned by the server
EDITABLE_FIELDS = ("title", "content")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def validate_article_fields(fields: Mapping[str, Any]) -> None:
    """
    Enforce the required-field rules on a complete article document.
    Both title and content must be non-empty strings.

    Raises:
        ValidationError: naming the first offending field
    """
    for name in EDITABLE_FIELDS:
        value = fields.get(name)
        if not isinstance(value, str) or value == "":
            raise ValidationError(f"'{name}' is required and must be a non-empty string")


class Article(Base):
    __tablename__ = "articles"

    # Opaque identifier generated on creation (UUID4 hex), never changed afterwards
    id = Column(String(32), primary_key=True, index=True)
    title = Column(String, nullable=False)
    content = Column(Text, nullable=False)

    # --- Metadata ---
    created_at = Column(DateTime(timezone=True), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=False)

    @classmethod
    def new(cls, title: Any, content: Any) -> "Article":
        """
        Build a validated, not-yet-persisted article.
        created_at and updated_at share the same instant so a fresh article reads as never updated.
        """
        validate_article_fields({"title": title, "content": content})
        now = utcnow()
        return cls(
            id=uuid.uuid4().hex,
            title=title,
            content=content,
            created_at=now,
            updated_at=now,
        )

    def apply_changes(self, changes: Mapping[str, Any]) -> None:
        """
        Apply a partial update. Only supplied editable fields change; the merged
        document is validated before anything is assigned, so a rejected update
        leaves the article untouched.
        """
        merged = {name: getattr(self, name) for name in EDITABLE_FIELDS}
        merged.update({name: value for name, value in changes.items() if name in EDITABLE_FIELDS})
        validate_article_fields(merged)

        for name in EDITABLE_FIELDS:
            setattr(self, name, merged[name])
        self.updated_at = utcnow()
