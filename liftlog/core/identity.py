"""Caller identity handed over by the upstream identity provider."""

from __future__ import annotations

import uuid
from dataclasses import dataclass

from liftlog.core.enums import UserRole


@dataclass(frozen=True, slots=True)
class Actor:
    """Authenticated caller. Trusted as-is; credentials are checked upstream."""

    user_id: uuid.UUID
    role: UserRole = UserRole.USER

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
