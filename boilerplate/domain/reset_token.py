from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone


def utcnow() -> datetime:
    """Current UTC time as a naive datetime (the form stored in the database)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def new_reset_token() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True, slots=True)
class ResetTokenPolicy:
    """Defines when a password reset token is usable "as of" a given instant.

    Semantics:
    - A token is valid iff expires_at > as_of (strict).
    - Expiring a token sets expires_at = as_of, so it is invalid from then on.
    - There is no background sweep; elapsed tokens simply stop matching.
    """

    as_of: datetime

    def expiry_for_new_token(self, minutes: int) -> datetime:
        return self.as_of + timedelta(minutes=minutes)

    def sqlalchemy_valid_predicate(self, *, expires_col):
        """Build a SQLAlchemy predicate implementing the validity rule."""
        return expires_col > self.as_of
