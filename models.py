"""
Data models for workout program creation and content documents
Using Pydantic for validation and serialization

Content items share one collection; item_type distinguishes exercises,
workouts and programs. Localized text lives in locale[] entries keyed by
language_iso.
"""

from datetime import datetime, timezone
from typing import Any, List, Optional
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field


# ============================================================================
# Enums
# ============================================================================

class ItemType(str, Enum):
    """Kinds of content item stored in content_items"""
    EXERCISE = "exercise"
    WORKOUT = "workout"
    PROGRAM = "program"


class ContentStatus(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


# ============================================================================
# Tool input models
# ============================================================================

class ContentInput(BaseModel):
    """Fields common to workouts and programs supplied by the caller"""
    model_config = ConfigDict(extra="ignore")

    title: str = Field(..., min_length=1)
    summary: str = ""
    description: str = ""
    creator: Optional[str] = None
    categories: List[str] = Field(default_factory=list)
    is_premium: bool = False
    content_metadata: dict[str, Any] = Field(default_factory=dict)


class WorkoutInput(ContentInput):
    sections: List[dict[str, Any]] = Field(default_factory=list)

    @property
    def total_duration(self) -> int:
        """Duration in seconds as recorded in content_metadata (0 when absent)"""
        value = self.content_metadata.get("total_duration")
        try:
            return int(value) if value is not None else 0
        except (TypeError, ValueError):
            return 0


class ProgramInput(ContentInput):
    pass


class ScheduleEntry(BaseModel):
    model_config = ConfigDict(extra="ignore")

    day: int = Field(..., ge=1)
    workout_index: int


class WorkoutProgramCreate(BaseModel):
    """Arguments of create_workout_program after structural validation"""
    program: ProgramInput
    workouts: List[WorkoutInput]
    program_schedule: List[ScheduleEntry]


# ============================================================================
# Stored documents
# ============================================================================

class LocaleEntry(BaseModel):
    language_iso: str = "en"
    title: str
    summary: str = ""
    description: str = ""


class ContentItemDocument(BaseModel):
    """
    Document written to content_items with schema defaults applied.

    Dumped with model_dump() right before insertion; _id is assigned by
    the store.
    """
    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    item_type: ItemType
    slug: str
    locale: List[LocaleEntry]
    creator: Optional[str] = None
    categories: List[str] = Field(default_factory=list)
    is_premium: bool = False
    status: ContentStatus = ContentStatus.PUBLISHED
    content_metadata: dict[str, Any] = Field(default_factory=dict)
    sections: List[dict[str, Any]] = Field(default_factory=list)
    schedule: List[dict[str, Any]] = Field(default_factory=list)
    published_at: datetime = Field(default_factory=utc_now)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    def to_document(self) -> dict[str, Any]:
        return self.model_dump(mode="python")
