"""Pydantic models for the Facebook data deletion callback."""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DeletionRequest(BaseModel):
    """Body Facebook posts when a user asks for their data to be deleted.

    Both fields are optional at the schema level so that a missing field is
    reported as ``Missing required fields`` by the service, not as a generic
    body validation error.
    """

    user_id: str | None = None
    challenge: str | None = None

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={
            "examples": [{"user_id": "12345", "challenge": "abc-xyz"}]
        },
    )

    @field_validator("user_id", mode="before")
    @classmethod
    def stringify_numeric_id(cls, value):
        # Platform ids are opaque, but some callers send them as JSON numbers.
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class DeletionConfirmation(BaseModel):
    """Response shape required by the caller. No other fields are allowed."""

    url: str
    confirmation_code: str

    model_config = ConfigDict(
        extra="forbid",
        json_schema_extra={
            "examples": [
                {
                    "url": "https://example.com/fb-data-deletion",
                    "confirmation_code": "abc-xyz",
                }
            ]
        },
    )


class DeletionOutcome(BaseModel):
    """Result of one deletion attempt. Lives only for the current request."""

    subject_id: str
    success: bool
    stores_cleared: list[str] = Field(default_factory=list)
    error: str | None = None


class ErrorResponse(BaseModel):
    """Body of every non-2xx JSON response."""

    error: str
    message: str

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "error": "Missing required fields",
                    "message": "Both user_id and challenge are required",
                }
            ]
        }
    )
