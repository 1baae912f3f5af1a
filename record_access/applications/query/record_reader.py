from typing import Any, Optional, Union

from sqlalchemy import select

from record_access.applications.query.entity_schema import EntitySchema
from record_access.applications.query.parameter_binder import ParameterBinder
from record_access.domain.exceptions import DataIntegrityViolationError, InvalidParameterError
from record_access.domain.models.parameter import ParamType
from record_access.domain.models.query import NotFound
from record_access.domain.ports.repositories.record_store import RecordStore, Row


class RecordReader:
    """Keyed lookups projecting only the schema's readable columns."""

    def __init__(
        self,
        store: RecordStore,
        schema: EntitySchema,
        binder: Optional[ParameterBinder] = None,
        timeout: Optional[float] = None,
    ):
        self.store = store
        self.schema = schema
        self.binder = binder or ParameterBinder(schema.parameters)
        self.timeout = timeout

    async def get_by_id(self, record_id: Any) -> Union[Row, NotFound]:
        return await self.get_by(self.schema.key, record_id)

    async def get_by(self, field: str, value: Any) -> Union[Row, NotFound]:
        if field != self.schema.key and field not in self.schema.unique:
            raise InvalidParameterError(field, f"not a unique key of {self.schema.name}")

        spec = self.binder.spec_for(field)
        if spec.type is ParamType.INTEGER and isinstance(value, int) and not isinstance(value, bool):
            if not spec.in_range(value):
                # No stored row can hold a key outside the column range.
                return NotFound(entity=self.schema.name, key=value)

        column = self.schema.readable_column(field)
        # Two rows are enough to detect a broken uniqueness assumption.
        statement = select(*self.schema.projection()).where(column == self.binder.bind(field, value)).limit(2)
        rows = await self.store.fetch_all(statement, timeout=self.timeout)

        if not rows:
            return NotFound(entity=self.schema.name, key=value)
        if len(rows) > 1:
            raise DataIntegrityViolationError(f"More than one {self.schema.name} matched unique field '{field}'")
        return rows[0]
