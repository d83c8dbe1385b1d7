"""WorkoutSession and LoggedSet models."""

from __future__ import annotations

import datetime as dt
import uuid

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from liftlog.core.enums import RecordType
from liftlog.db.base import Base

# One boolean column per record type on logged_sets
PR_FLAG_COLUMNS: dict[RecordType, str] = {
    RecordType.MAX_WEIGHT: "is_max_weight_pr",
    RecordType.MAX_REPS: "is_max_reps_pr",
    RecordType.ESTIMATED_ONE_REP_MAX: "is_estimated_one_rep_max_pr",
    RecordType.MAX_VOLUME: "is_max_volume_pr",
}


class WorkoutSession(Base):
    """A dated training session belonging to one user."""

    __tablename__ = "workout_sessions"
    __table_args__ = (Index("ix_workout_sessions_user_id_date", "user_id", "date"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    share_token: Mapped[str | None] = mapped_column(String(64), unique=True, nullable=True)
    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: dt.datetime.now(dt.timezone.utc), nullable=False
    )

    user: Mapped["User"] = relationship("User", back_populates="sessions")
    sets: Mapped[list["LoggedSet"]] = relationship(
        "LoggedSet", back_populates="session", cascade="all, delete-orphan", passive_deletes=True
    )


class LoggedSet(Base):
    """One set within a session. PR flags are fixed when the set is logged."""

    __tablename__ = "logged_sets"
    __table_args__ = (
        CheckConstraint("reps >= 0", name="reps_non_negative"),
        CheckConstraint("weight >= 0", name="weight_non_negative"),
        CheckConstraint("rpe IS NULL OR (rpe >= 1 AND rpe <= 10)", name="rpe_range"),
        Index("ix_logged_sets_exercise_id_created_at", "exercise_id", "created_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    session_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("workout_sessions.id", ondelete="CASCADE"), nullable=False, index=True
    )
    exercise_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("exercises.id", ondelete="RESTRICT"), nullable=False
    )
    set_number: Mapped[int] = mapped_column(Integer, nullable=False)
    reps: Mapped[int] = mapped_column(Integer, nullable=False)
    weight: Mapped[float] = mapped_column(Float, nullable=False)
    rpe: Mapped[int | None] = mapped_column(Integer, nullable=True)

    is_max_weight_pr: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_max_reps_pr: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_estimated_one_rep_max_pr: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_max_volume_pr: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: dt.datetime.now(dt.timezone.utc), nullable=False
    )

    session: Mapped["WorkoutSession"] = relationship("WorkoutSession", back_populates="sets")
    exercise: Mapped["Exercise"] = relationship("Exercise", back_populates="logged_sets")

    @property
    def pr_types(self) -> list[RecordType]:
        """Record types this set newly achieved, in ledger order."""
        return [rt for rt, column in PR_FLAG_COLUMNS.items() if getattr(self, column)]

    @property
    def is_pr(self) -> bool:
        return any(getattr(self, column) for column in PR_FLAG_COLUMNS.values())

    @property
    def volume(self) -> float:
        return self.weight * self.reps
