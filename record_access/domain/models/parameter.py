from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


class ParamType(str, Enum):
    STRING = "string"
    INTEGER = "integer"
    DECIMAL = "decimal"
    BOOLEAN = "boolean"


class ParameterSpec(BaseModel):
    """Declared type and width of a value that may be bound into a statement.

    Integers default to the signed 64-bit range; columns declared as
    ``Integer`` should narrow it to 32 bits.
    """

    type: ParamType
    max_length: Optional[int] = Field(default=None, gt=0)
    precision: int = 12
    scale: int = 2
    min_value: int = INT64_MIN
    max_value: int = INT64_MAX
    model_config = ConfigDict(frozen=True)

    def in_range(self, value: int) -> bool:
        return self.min_value <= value <= self.max_value
