from __future__ import annotations


class UserStoreError(Exception):
    """Base class for every failure the user store reports to its callers."""


class InvalidUserInputError(UserStoreError, ValueError):
    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field


class UserNotFoundError(UserStoreError, LookupError):
    def __init__(self, *, user_id: str | None = None, email: str | None = None):
        if email is not None:
            message = f"No user with email '{email}'"
        else:
            message = f"No user with id '{user_id}'"
        super().__init__(message)
        self.user_id = user_id
        self.email = email


class DuplicateEmailError(UserStoreError):
    def __init__(self, email: str):
        super().__init__(f"Email '{email}' is already in use")
        self.email = email
