from __future__ import annotations

from user_directory.settings import Settings, get_settings
from user_directory.user_store import InMemoryUserStore


def get_settings_dep() -> Settings:
    """FastAPI dependency for settings.

    Delegates to user_directory.settings.get_settings (canonical constructor).
    """
    return get_settings()


# One store per process. Tests swap it out through app.dependency_overrides.
_store = InMemoryUserStore()


def get_user_store() -> InMemoryUserStore:
    return _store
