from __future__ import annotations

import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from user_directory.errors import InvalidUserInputError


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _next_timestamp(previous: datetime) -> datetime:
    # updated_at must move forward even if the clock has not ticked since `previous`.
    now = _utcnow()
    if now <= previous:
        return previous + timedelta(microseconds=1)
    return now


def _require_text(field: str, value: Any) -> str:
    if not isinstance(value, str):
        raise InvalidUserInputError(field, f"{field} must be a string")
    v = value.strip()
    if not v:
        raise InvalidUserInputError(field, f"{field} is required")
    return v


def _require_email(value: Any) -> str:
    email = _require_text("email", value)
    local, sep, domain = email.partition("@")
    if not sep or not local or not domain or "@" in domain or any(c.isspace() for c in email):
        raise InvalidUserInputError("email", f"'{email}' is not a valid email address")
    return email


@dataclass(frozen=True)
class UserRecord:
    """Immutable snapshot of one user.

    Records are never edited in place: ``with_updates`` derives a new value and
    the store swaps it in wholesale. ``id`` and ``created_at`` are carried over
    unchanged by every derived copy.
    """

    id: str
    first_name: str
    last_name: str
    email: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def create(cls, *, first_name: str, last_name: str, email: str) -> "UserRecord":
        first = _require_text("first_name", first_name)
        last = _require_text("last_name", last_name)
        mail = _require_email(email)
        now = _utcnow()
        return cls(
            id=str(uuid.uuid4()),
            first_name=first,
            last_name=last,
            email=mail,
            created_at=now,
            updated_at=now,
        )

    def with_updates(
        self,
        *,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        email: Optional[str] = None,
    ) -> "UserRecord":
        return self.with_changes(validate_changes(first_name=first_name, last_name=last_name, email=email))

    def with_changes(self, changes: dict[str, str]) -> "UserRecord":
        """Derive a copy from fields already checked by ``validate_changes``."""
        return replace(self, updated_at=_next_timestamp(self.updated_at), **changes)

    def matches_name(self, term: str) -> bool:
        """Case-insensitive substring match against first or last name."""
        needle = term.casefold()
        return needle in self.first_name.casefold() or needle in self.last_name.casefold()

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "email": self.email,
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat(),
        }


def validate_changes(
    *,
    first_name: Optional[str] = None,
    last_name: Optional[str] = None,
    email: Optional[str] = None,
) -> dict[str, str]:
    """Trim and validate the supplied fields of a partial update; ``None`` means unchanged."""
    changes: dict[str, str] = {}
    if first_name is not None:
        changes["first_name"] = _require_text("first_name", first_name)
    if last_name is not None:
        changes["last_name"] = _require_text("last_name", last_name)
    if email is not None:
        changes["email"] = _require_email(email)
    return changes
