from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, SecretStr


class UserSchema(BaseModel):
    username: str = Field(min_length=1, max_length=64)
    email: EmailStr
    password_hash: SecretStr
    role: Optional[str] = Field(default=None, max_length=32)


class UserPublic(BaseModel):
    id: int
    username: str
    email: str
    created_date: datetime
    is_active: bool
    role: Optional[str] = None
    model_config = ConfigDict(from_attributes=True)


class CredentialSchema(BaseModel):
    # Width limits are enforced by the validator itself so they follow settings.
    username: str
    password_hash: SecretStr


class CredentialCheck(BaseModel):
    valid: bool
