"""Logged set and session read/write schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from liftlog.core.enums import RecordType


class ExerciseRef(BaseModel):
    """Minimal exercise info for embedding in set responses (id + name only)."""

    id: UUID
    name: str

    model_config = ConfigDict(from_attributes=True)


class LoggedSetCreate(BaseModel):
    exercise_id: UUID
    set_number: int | None = None
    reps: int
    weight: float
    rpe: int | None = None


class LoggedSetRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    session_id: UUID
    exercise_id: UUID
    set_number: int
    reps: int
    weight: float
    rpe: int | None = None
    is_pr: bool = False
    pr_types: list[RecordType] = Field(default_factory=list)
    created_at: datetime
    exercise: ExerciseRef | None = None


class SessionVolumeRead(BaseModel):
    session_id: UUID
    volume: float


class SessionDeleted(BaseModel):
    session_id: UUID
    removed_sets: int
