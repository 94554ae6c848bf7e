"""User model."""

import uuid

from pydantic import Field

from .base import AozModel


class UserDraft(AozModel):
    username: str
    password: str


class User(AozModel):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    username: str
    password: str
