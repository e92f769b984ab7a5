from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from user_directory.records import UserRecord


class UserCreateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    first_name: str = Field(..., alias="firstName", description="Given name")
    last_name: str = Field(..., alias="lastName", description="Family name")
    email: str = Field(..., description="Unique, case-sensitive email address")


class UserUpdateRequest(BaseModel):
    """Partial update: omitted (or null) fields keep their current values."""

    model_config = ConfigDict(populate_by_name=True)

    first_name: Optional[str] = Field(default=None, alias="firstName")
    last_name: Optional[str] = Field(default=None, alias="lastName")
    email: Optional[str] = None


class UserResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")
    email: str
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    @classmethod
    def from_record(cls, record: UserRecord) -> "UserResponse":
        return cls.model_validate(record.to_dict())


class CountResponse(BaseModel):
    count: int


class ExistsResponse(BaseModel):
    exists: bool
