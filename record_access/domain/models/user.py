from datetime import datetime
from typing import Optional

from pydantic import BaseModel, SecretStr


class User(BaseModel):
    id: int
    username: str
    email: str
    created_date: datetime
    is_active: bool = True
    role: Optional[str] = None


class NewUser(BaseModel):
    username: str
    email: str
    password_hash: SecretStr
    role: Optional[str] = None


class Credential(BaseModel):
    username: str
    password_hash: SecretStr
