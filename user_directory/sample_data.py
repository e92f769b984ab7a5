from __future__ import annotations

import logging

from user_directory.errors import DuplicateEmailError
from user_directory.records import UserRecord
from user_directory.user_store import InMemoryUserStore

logger = logging.getLogger("user_directory.sample_data")

SAMPLE_USERS: tuple[tuple[str, str, str], ...] = (
    ("John", "Doe", "john.doe@example.com"),
    ("Jane", "Smith", "jane.smith@example.com"),
    ("Bob", "Brown", "bob.brown@example.com"),
    ("Alice", "Johnson", "alice.johnson@example.com"),
)


def load_sample_users(store: InMemoryUserStore) -> list[UserRecord]:
    """Seed the demo users through the regular create path.

    Users whose email is already taken are skipped, so calling this twice on
    the same store is harmless.
    """
    created: list[UserRecord] = []
    for first, last, email in SAMPLE_USERS:
        try:
            created.append(store.create(first_name=first, last_name=last, email=email))
        except DuplicateEmailError:
            logger.info("Sample user already present, skipping: %s", email)
    logger.info("Loaded %d sample users (store now holds %d)", len(created), store.count())
    return created
