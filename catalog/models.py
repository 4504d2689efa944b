"""
Pydantic models for book records and decoded request payloads.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from .errors import DecodeError


class BookStatus(str, Enum):
    """Reading status of a book."""
    UNREAD = "unread"
    READING = "reading"
    COMPLETED = "completed"


class Book(BaseModel):
    """
    A stored book record.

    Records are immutable; an update produces a new record merged from
    the existing one.
    """
    id: str = Field(..., min_length=1, description="System-assigned identifier")
    title: str = Field(..., min_length=1, description="Book title")
    author: str = Field(..., min_length=1, description="Book author")
    status: BookStatus = Field(..., description="Reading status")

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "id": "3f2c8a1e-6d0b-4c1e-9a57-2b1f0c4d8e90",
                "title": "Hamlet",
                "author": "William Shakespeare",
                "status": "reading",
            }
        },
    )


class BookPayload(BaseModel):
    """
    A book as sent by a client, before validation.

    Missing fields decode to empty strings so the validators can tell
    "not provided" apart from a real value. Unknown keys are ignored.
    """
    id: str = ""
    title: str = ""
    author: str = ""
    status: str = ""

    model_config = ConfigDict(extra="ignore")

    @field_validator("id", "title", "author", "status", mode="before")
    @classmethod
    def null_as_empty(cls, v):
        """Treat JSON null like an absent field."""
        return "" if v is None else v

    @classmethod
    def decode(cls, raw: bytes) -> "BookPayload":
        """
        Decode a JSON request body.

        Raises:
            DecodeError: If the body is not a JSON object of string fields.
        """
        try:
            return cls.model_validate_json(raw)
        except PydanticValidationError as e:
            first = e.errors()[0]
            location = ".".join(str(part) for part in first.get("loc", ()))
            if location:
                raise DecodeError(f"malformed request body: {location}: {first['msg']}") from e
            raise DecodeError(f"malformed request body: {first['msg']}") from e
