"""
Pydantic schemas for user accounts.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from ..core.enums import RoleName
from .base import StandardizedModel, wire_field


class UserUpsertRequest(StandardizedModel):
    """Body of PUT /users, sent by the frontend after every sign-in."""

    email: str = Field(..., min_length=3, max_length=320)
    name: Optional[str] = Field(None, max_length=200)
    photo_url: Optional[str] = wire_field("photo_url", "photoURL", None, max_length=1000)
    role: Optional[str] = None


class UserPatchRequest(StandardizedModel):
    """Body of PATCH /users/{id}."""

    name: Optional[str] = None
    email: Optional[str] = Field(None, min_length=3, max_length=320)
    role: Optional[RoleName] = None
    status: Optional[str] = None
    verified: Optional[bool] = None


class UserResponse(StandardizedModel):
    id: str = wire_field("id", "_id")
    email: str
    name: Optional[str] = None
    photo_url: Optional[str] = wire_field("photo_url", "photoURL", None)
    role: str
    status: Optional[str] = None
    verified: bool
    created_at: datetime = wire_field("created_at", "created_at")
    last_logged_in: datetime = wire_field("last_logged_in", "last_loggedIn")
    timestamp: datetime


class RoleResponse(StandardizedModel):
    role: Optional[str] = None
