"""Ledger and stats schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from liftlog.core.enums import RecordType


class LedgerEntryRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    exercise_id: UUID
    record_type: RecordType
    value: float
    achieved_at: datetime


class UserRecordRead(LedgerEntryRead):
    exercise_name: str


class TrainingSummaryRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    workouts_last_7_days: int
    workouts_last_30_days: int
    volume_last_7_days: float
