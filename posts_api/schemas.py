"""
Pydantic schemas for API request/response models.
"""
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator


class PostIn(BaseModel):
    """
    Request body for creating a post.

    Decoding is lenient in the same ways a plain JSON object decoder is:
    - missing fields, null fields and a null body all give empty strings
    - keys match case-insensitively ("Title" fills title), exact keys win
    - unknown keys (including an `id` sent by the client) are ignored
    Non-string values are still rejected.
    """
    title: str = Field(default="")
    content: str = Field(default="")

    @model_validator(mode="before")
    @classmethod
    def fold_key_case(cls, data: Any) -> Any:
        if data is None:
            return {}
        if not isinstance(data, dict):
            return data

        folded = {}
        for key, value in data.items():
            name = key.lower() if isinstance(key, str) else key
            if name in cls.model_fields and name not in data:
                folded[name] = value
        for name in cls.model_fields:
            if name in data:
                folded[name] = data[name]
        return folded

    @field_validator("title", "content", mode="before")
    @classmethod
    def null_is_empty(cls, v: Any) -> Any:
        return "" if v is None else v


class PostOut(BaseModel):
    """Output schema for a stored post."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    content: str


def describe_validation_errors(exc: ValidationError) -> str:
    """One-line summary of a pydantic error, e.g. `title: Input should be a valid string`."""
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()))
        parts.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return "; ".join(parts)
