from __future__ import annotations

import threading
from typing import Dict, List, Optional

from user_directory.errors import DuplicateEmailError, UserNotFoundError
from user_directory.records import UserRecord, validate_changes


class InMemoryUserStore:
    """Thread-safe in-memory user directory.

    Two views over the same live set:
    - ``_by_id``: id -> record, in creation order.
    - ``_by_email``: email -> id, used for uniqueness checks and email lookups.

    Both are guarded by one lock and every mutation updates them together, so
    no caller can observe one index ahead of the other. Records are immutable,
    which makes a list copied under the lock a consistent snapshot.

    Storage semantics:
    - Stored only in process memory (cleared on restart).
    - Ids are never reused; a deleted record is gone for good.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._by_id: Dict[str, UserRecord] = {}
        self._by_email: Dict[str, str] = {}

    def __len__(self) -> int:
        return self.count()

    def create(self, *, first_name: str, last_name: str, email: str) -> UserRecord:
        record = UserRecord.create(first_name=first_name, last_name=last_name, email=email)
        with self._lock:
            if record.email in self._by_email:
                raise DuplicateEmailError(record.email)
            self._by_id[record.id] = record
            self._by_email[record.email] = record.id
        return record

    def get_by_id(self, user_id: str) -> UserRecord:
        with self._lock:
            record = self._by_id.get(user_id)
        if record is None:
            raise UserNotFoundError(user_id=user_id)
        return record

    def get_by_email(self, email: str) -> UserRecord:
        key = (email or "").strip()
        with self._lock:
            user_id = self._by_email.get(key)
            record = self._by_id.get(user_id) if user_id is not None else None
        if record is None:
            raise UserNotFoundError(email=key)
        return record

    def list_all(self) -> List[UserRecord]:
        with self._lock:
            return list(self._by_id.values())

    def search_by_name(self, term: str) -> List[UserRecord]:
        needle = (term or "").strip()
        with self._lock:
            return [r for r in self._by_id.values() if r.matches_name(needle)]

    def update(
        self,
        user_id: str,
        *,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        email: Optional[str] = None,
    ) -> UserRecord:
        # Validate before touching shared state; a bad field must leave the store as it was.
        changes = validate_changes(first_name=first_name, last_name=last_name, email=email)
        new_email = changes.get("email")

        with self._lock:
            current = self._by_id.get(user_id)
            if current is None:
                raise UserNotFoundError(user_id=user_id)
            if new_email is not None and new_email != current.email:
                holder = self._by_email.get(new_email)
                if holder is not None and holder != user_id:
                    raise DuplicateEmailError(new_email)

            updated = current.with_changes(changes)
            if updated.email != current.email:
                del self._by_email[current.email]
                self._by_email[updated.email] = user_id
            self._by_id[user_id] = updated
        return updated

    def delete(self, user_id: str) -> None:
        with self._lock:
            record = self._by_id.pop(user_id, None)
            if record is None:
                raise UserNotFoundError(user_id=user_id)
            del self._by_email[record.email]

    def count(self) -> int:
        with self._lock:
            return len(self._by_id)

    def exists(self, user_id: str) -> bool:
        with self._lock:
            return user_id in self._by_id
