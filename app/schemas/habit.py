"""
Habit CRUD schemas.

POST /habits       → HabitCreate → HabitResponse
GET  /habits       → HabitListResponse
PUT  /habits/{id}  → HabitUpdate → HabitResponse
"""
from __future__ import annotations

from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, field_validator

from app.models.habit import HabitFrequency

TagName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=64)]


def _strip_optional(v):
    return v.strip() if isinstance(v, str) else v


class HabitCreate(BaseModel):
    title: Annotated[str, Field(min_length=1, max_length=256, examples=["Read 20 pages"])]
    description: Optional[str] = Field(default=None, max_length=10_000)
    frequency: HabitFrequency = Field(description='"daily" or "weekly".')
    tags: list[TagName] = Field(default_factory=list, examples=[["health", "morning"]])
    reminder_time: Optional[str] = Field(default=None, max_length=32, examples=["07:30"])

    @field_validator("title", mode="before")
    @classmethod
    def strip_title(cls, v: str) -> str:
        stripped = _strip_optional(v)
        if isinstance(stripped, str) and not stripped:
            raise ValueError("title must not be empty")
        return stripped

    @field_validator("description", "reminder_time", mode="before")
    @classmethod
    def strip_text(cls, v):
        return _strip_optional(v)


class HabitUpdate(BaseModel):
    """Partial update: only fields present in the request body are applied."""
    title: Optional[Annotated[str, Field(min_length=1, max_length=256)]] = None
    description: Optional[str] = Field(default=None, max_length=10_000)
    frequency: Optional[HabitFrequency] = None
    tags: Optional[list[TagName]] = None
    reminder_time: Optional[str] = Field(default=None, max_length=32)

    @field_validator("title", mode="before")
    @classmethod
    def strip_title(cls, v):
        stripped = _strip_optional(v)
        if stripped is None or not stripped:
            raise ValueError("title cannot be empty")
        return stripped

    @field_validator("frequency", "tags", mode="before")
    @classmethod
    def reject_null(cls, v, info):
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v

    @field_validator("description", "reminder_time", mode="before")
    @classmethod
    def strip_text(cls, v):
        return _strip_optional(v)


class HabitResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: Optional[str] = None
    frequency: HabitFrequency
    tags: list[str]
    reminder_time: Optional[str] = None
    created_at: str
    updated_at: str


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int


class HabitListResponse(BaseModel):
    items: list[HabitResponse]
    pagination: Pagination
