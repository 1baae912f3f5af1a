import math
from enum import Enum
from typing import Any, Generic, List, Tuple, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class FilterOperator(str, Enum):
    EQ = "eq"
    GTE = "gte"
    LTE = "lte"
    EQ_CI = "eq-ci"
    CONTAINS_CI = "contains-ci"


class FilterClause(BaseModel):
    fields: Tuple[str, ...]
    operator: FilterOperator
    value: Any = None
    model_config = ConfigDict(frozen=True)

    @property
    def is_absent(self) -> bool:
        return self.value is None or (isinstance(self.value, str) and self.value == "")


class FilterSpec(BaseModel):
    """Ordered set of optional predicates.

    Clauses are kept even when their value is absent; the composer decides
    what to omit so the filter stays a faithful record of the caller's input.
    """

    clauses: Tuple[FilterClause, ...] = ()
    model_config = ConfigDict(frozen=True)

    def _with(self, clause: FilterClause) -> "FilterSpec":
        return FilterSpec(clauses=self.clauses + (clause,))

    def eq(self, field: str, value: Any) -> "FilterSpec":
        return self._with(FilterClause(fields=(field,), operator=FilterOperator.EQ, value=value))

    def eq_ci(self, field: str, value: Any) -> "FilterSpec":
        return self._with(FilterClause(fields=(field,), operator=FilterOperator.EQ_CI, value=value))

    def gte(self, field: str, value: Any) -> "FilterSpec":
        return self._with(FilterClause(fields=(field,), operator=FilterOperator.GTE, value=value))

    def lte(self, field: str, value: Any) -> "FilterSpec":
        return self._with(FilterClause(fields=(field,), operator=FilterOperator.LTE, value=value))

    def contains(self, fields: Tuple[str, ...], value: Any) -> "FilterSpec":
        return self._with(FilterClause(fields=tuple(fields), operator=FilterOperator.CONTAINS_CI, value=value))

    @property
    def present_clauses(self) -> List[FilterClause]:
        return [clause for clause in self.clauses if not clause.is_absent]


class PageRequest(BaseModel):
    page: int = 1
    page_size: int = 10
    model_config = ConfigDict(frozen=True)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


class PageResult(BaseModel, Generic[T]):
    items: List[T] = Field(default_factory=list)
    filtered_total: int = Field(ge=0)
    unfiltered_total: int = Field(ge=0)
    page: int
    page_size: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.filtered_total / self.page_size) if self.filtered_total else 0


class NotFound(BaseModel):
    """Returned, never raised, when a keyed lookup matches no record."""

    entity: str
    key: Any
    model_config = ConfigDict(frozen=True)
