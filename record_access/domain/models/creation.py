from enum import Enum
from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class CreationState(str, Enum):
    PENDING = "pending"
    WRITTEN = "written"
    CONFIRMED = "confirmed"
    FAILED = "failed"


ALLOWED_TRANSITIONS = {
    CreationState.PENDING: {CreationState.WRITTEN, CreationState.FAILED},
    CreationState.WRITTEN: {CreationState.CONFIRMED, CreationState.FAILED},
    CreationState.CONFIRMED: set(),
    CreationState.FAILED: set(),
}


class CreateResult(BaseModel, Generic[T]):
    record: T
    state: CreationState = CreationState.CONFIRMED
