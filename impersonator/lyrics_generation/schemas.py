from __future__ import annotations
from pydantic import BaseModel, Field, field_validator
from typing import Any


class GenerationRequest(BaseModel):
    authorName: str = Field(default="", description="Artist whose style to imitate")
    song: str = Field(default="", description="Song title used as style reference")
    description: str = Field(default="", description="Mood / themes for the new lyrics")

    @field_validator("authorName", "song", "description", mode="before")
    @classmethod
    def loose_text(cls, v: Any) -> Any:
        # falsy values (null, 0, false, "") read as missing; anything else as its text
        if isinstance(v, str):
            return v
        if not v:
            return ""
        return str(v)

    @classmethod
    def from_payload(cls, payload: Any) -> "GenerationRequest":
        """Build from an untyped JSON body; a non-object carries no fields."""
        if payload is None:
            raise TypeError("Request body is null")
        if not isinstance(payload, dict):
            return cls()
        return cls.model_validate(payload)

    def has_required_fields(self) -> bool:
        return bool(self.authorName and self.song)


class GenerationResponse(BaseModel):
    lyrics: str


class ErrorResponse(BaseModel):
    error: str
