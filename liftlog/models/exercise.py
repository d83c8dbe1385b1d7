"""Exercise model - shared defaults (no owner) and per-user custom movements."""

from __future__ import annotations

import uuid

from sqlalchemy import Boolean, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from liftlog.db.base import Base


class Exercise(Base):
    """A named movement. Deletion is restricted while any logged set references it."""

    __tablename__ = "exercises"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    category: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    muscle_group: Mapped[str | None] = mapped_column(String(100), nullable=True)
    equipment: Mapped[str | None] = mapped_column(String(100), nullable=True)
    is_default: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    user_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=True, index=True
    )

    owner: Mapped["User | None"] = relationship("User", back_populates="exercises")
    # No ORM cascade: the database refuses to drop an exercise that sets still point at
    logged_sets: Mapped[list["LoggedSet"]] = relationship(
        "LoggedSet", back_populates="exercise", passive_deletes="all"
    )
    ledger_entries: Mapped[list["LedgerEntry"]] = relationship(
        "LedgerEntry", back_populates="exercise", cascade="all, delete-orphan", passive_deletes=True
    )

    def is_visible_to(self, user_id: uuid.UUID) -> bool:
        """Shared defaults are visible to everyone, custom exercises only to their owner."""
        return self.is_default or self.user_id is None or self.user_id == user_id
