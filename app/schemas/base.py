"""Base schemas for the application."""

from datetime import UTC, datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def to_utc_iso(value: datetime) -> str:
    """Render a timestamp as ISO-8601 UTC with millisecond precision and a ``Z`` suffix.

    Naive values are read as UTC, which is how the database columns store them.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class BaseSchema(BaseModel):
    """Base schema class with common configuration."""
    model_config = ConfigDict(from_attributes=True)


class CamelSchema(BaseSchema):
    """Response schema serialized with camelCase keys."""
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

    def to_json_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")


class SuccessResponse(BaseSchema):
    """Standard success envelope carrying a payload."""
    success: bool = True
    data: Any = None


class StatusResponse(BaseSchema):
    """Success envelope carrying only a human-readable message."""
    success: bool = True
    message: str


class ErrorResponse(BaseSchema):
    """Standard error envelope."""
    success: bool = False
    error: str
    details: Optional[Any] = None
