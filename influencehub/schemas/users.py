from __future__ import annotations

from typing import ClassVar, Optional

from pydantic import Field

from influencehub.db.enums import DEFAULT_USER_ROLE
from influencehub.schemas.common import PatchModel, PayloadModel, RecordModel, Timestamp


class UserCreate(PayloadModel):
    username: str = Field(..., min_length=1)
    email: Optional[str] = None
    password: str = Field(..., min_length=1)
    role: Optional[str] = None
    first_name: Optional[str] = Field(None, alias="firstName")
    last_name: Optional[str] = Field(None, alias="lastName")
    profile_image_url: Optional[str] = Field(None, alias="profileImageUrl")


class UserUpdate(PatchModel):
    non_nullable: ClassVar[frozenset[str]] = frozenset({"username", "password", "role"})

    username: Optional[str] = Field(None, min_length=1)
    email: Optional[str] = None
    password: Optional[str] = Field(None, min_length=1)
    role: Optional[str] = None
    first_name: Optional[str] = Field(None, alias="firstName")
    last_name: Optional[str] = Field(None, alias="lastName")
    profile_image_url: Optional[str] = Field(None, alias="profileImageUrl")


class UserPublic(RecordModel):
    id: int
    username: str
    email: Optional[str] = None
    role: str = DEFAULT_USER_ROLE
    first_name: Optional[str] = Field(None, alias="firstName")
    last_name: Optional[str] = Field(None, alias="lastName")
    profile_image_url: Optional[str] = Field(None, alias="profileImageUrl")
    created_at: Timestamp = Field(..., alias="createdAt")
    updated_at: Timestamp = Field(..., alias="updatedAt")


class User(UserPublic):
    password: str
