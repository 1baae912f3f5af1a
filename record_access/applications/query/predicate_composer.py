from typing import List, Optional

from sqlalchemy import and_, func, or_
from sqlalchemy.sql.elements import ColumnElement

from record_access.applications.query.entity_schema import EntitySchema
from record_access.applications.query.parameter_binder import LIKE_ESCAPE, ParameterBinder
from record_access.domain.exceptions import InvalidParameterError
from record_access.domain.models.parameter import ParamType
from record_access.domain.models.query import FilterClause, FilterOperator, FilterSpec

_SINGLE_FIELD_OPERATORS = {FilterOperator.EQ, FilterOperator.EQ_CI, FilterOperator.GTE, FilterOperator.LTE}


class PredicateComposer:
    """Compiles a ``FilterSpec`` into one bound predicate over ``schema``.

    Absent clauses are dropped; when nothing is left the result is ``None`` so
    callers add no WHERE clause at all. Contradictory ranges (min above max) are
    passed through untouched.
    """

    def __init__(self, schema: EntitySchema, binder: Optional[ParameterBinder] = None):
        self.schema = schema
        self.binder = binder or ParameterBinder(schema.parameters)

    def compose(self, filter_spec: FilterSpec) -> Optional[ColumnElement[bool]]:
        for clause in filter_spec.clauses:
            self._check_shape(clause)

        predicates: List[ColumnElement[bool]] = [self._compile(clause) for clause in filter_spec.present_clauses]

        if not predicates:
            return None
        if len(predicates) == 1:
            return predicates[0]
        return and_(*predicates)

    def _check_shape(self, clause: FilterClause) -> None:
        if not clause.fields:
            raise InvalidParameterError(clause.operator.value, "filter names no field")
        if clause.operator in _SINGLE_FIELD_OPERATORS and len(clause.fields) != 1:
            raise InvalidParameterError(",".join(clause.fields), f"'{clause.operator.value}' takes one field")
        for field in clause.fields:
            self.schema.readable_column(field)

    def _compile(self, clause: FilterClause) -> ColumnElement[bool]:
        if clause.operator is FilterOperator.CONTAINS_CI:
            matches = [
                self.schema.readable_column(field).ilike(
                    self.binder.bind_contains(field, clause.value), escape=LIKE_ESCAPE
                )
                for field in clause.fields
            ]
            return matches[0] if len(matches) == 1 else or_(*matches)

        field = clause.fields[0]
        column = self.schema.readable_column(field)
        value = self.binder.bind(field, clause.value)

        if clause.operator is FilterOperator.EQ:
            return column == value
        if clause.operator is FilterOperator.EQ_CI:
            if self.binder.spec_for(field).type is not ParamType.STRING:
                raise InvalidParameterError(field, "case-insensitive match requires a string field")
            return func.lower(column) == func.lower(value)
        if clause.operator is FilterOperator.GTE:
            return column >= value
        if clause.operator is FilterOperator.LTE:
            return column <= value

        raise InvalidParameterError(field, f"unsupported operator '{clause.operator.value}'")
