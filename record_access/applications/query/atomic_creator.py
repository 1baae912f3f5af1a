from typing import Any, Dict, Mapping, Optional

from sqlalchemy import insert, select
from sqlalchemy.sql.elements import BindParameter

from record_access.applications.query.entity_schema import EntitySchema
from record_access.applications.query.parameter_binder import ParameterBinder
from record_access.domain.exceptions import (
    CreateFailedError,
    InvalidParameterError,
    ReadBackFailedError,
    StoreCommandError,
    StoreError,
    WriteFailedError,
)
from record_access.domain.models.creation import ALLOWED_TRANSITIONS, CreateResult, CreationState
from record_access.domain.ports.repositories.record_store import CommandResult, RecordStore, Row, StoreTransaction
from record_access.domain.ports.services.logger import LoggerPort
from record_access.infrastructure.logging.std_logger_adapter import StdLoggerAdapter


class CreationAttempt:
    def __init__(self, entity: str, logger: LoggerPort):
        self.entity = entity
        self.logger = logger
        self.state = CreationState.PENDING

    def advance(self, target: CreationState) -> None:
        if target not in ALLOWED_TRANSITIONS[self.state]:
            raise RuntimeError(f"Illegal creation transition {self.state.value} -> {target.value}")
        self.logger.debug("Create %s: %s -> %s", self.entity, self.state.value, target.value)
        self.state = target


class AtomicCreator:
    """Insert a record and return it, with store defaults, as one unit of work.

    Write and read-back share a transaction. With ``INSERT .. RETURNING`` they
    are a single statement; otherwise the row is re-selected by the primary key
    the store generated for this very insert. Any failure rolls the write back.
    """

    def __init__(
        self,
        store: RecordStore,
        schema: EntitySchema,
        binder: Optional[ParameterBinder] = None,
        timeout: Optional[float] = None,
        logger: Optional[LoggerPort] = None,
    ):
        self.store = store
        self.schema = schema
        self.binder = binder or ParameterBinder(schema.parameters)
        self.timeout = timeout
        self.logger = logger or StdLoggerAdapter(__name__, entity=schema.name)

    async def create(self, fields: Mapping[str, Any]) -> CreateResult[Row]:
        values = self.bind_values(fields)
        attempt = CreationAttempt(self.schema.name, self.logger)

        try:
            async with self.store.begin(timeout=self.timeout) as transaction:
                result = await self._write(transaction, values)
                attempt.advance(CreationState.WRITTEN)
                row = await self._read_back(transaction, result)
        except StoreCommandError as e:
            attempt.advance(CreationState.FAILED)
            self.logger.warning("Create %s rejected by store: %s", self.schema.name, e)
            raise WriteFailedError(f"Could not write {self.schema.name}", entity=self.schema.name) from e
        except (CreateFailedError, StoreError) as e:
            attempt.advance(CreationState.FAILED)
            self.logger.warning("Create %s failed during %s: %s", self.schema.name, _phase(e), e)
            raise

        attempt.advance(CreationState.CONFIRMED)
        self.logger.info("Created %s with %s=%s", self.schema.name, self.schema.key, row.get(self.schema.key))
        return CreateResult[Row](record=row, state=attempt.state)

    def bind_values(self, fields: Mapping[str, Any]) -> Dict[str, BindParameter]:
        for name in fields:
            if name == self.schema.key:
                raise InvalidParameterError(name, "identifier is assigned by the store")
            if name not in self.schema.insertable:
                raise InvalidParameterError(name, f"not writable on {self.schema.name}")

        for name in self.schema.required:
            if fields.get(name) is None:
                raise InvalidParameterError(name, "value is required")

        return {name: self.binder.bind(name, value) for name, value in fields.items() if value is not None}

    async def _write(self, transaction: StoreTransaction, values: Dict[str, BindParameter]) -> CommandResult:
        statement = insert(self.schema.table).values(values)
        if self.store.supports_returning:
            statement = statement.returning(*self.schema.projection())
        return await transaction.execute(statement)

    async def _read_back(self, transaction: StoreTransaction, result: CommandResult) -> Row:
        if self.store.supports_returning:
            rows = result.rows
        else:
            if not result.inserted_primary_key or result.inserted_primary_key[0] is None:
                raise ReadBackFailedError(f"Store returned no identifier for new {self.schema.name}", self.schema.name)
            key = result.inserted_primary_key[0]
            statement = select(*self.schema.projection()).where(
                self.schema.readable_column(self.schema.key) == self.binder.bind(self.schema.key, key)
            )
            try:
                rows = await transaction.fetch_all(statement)
            except StoreCommandError as e:
                raise ReadBackFailedError(f"Could not read back new {self.schema.name}", self.schema.name) from e

        if len(rows) != 1:
            raise ReadBackFailedError(
                f"Expected one {self.schema.name} row after insert, got {len(rows)}", self.schema.name
            )
        return rows[0]


def _phase(error: Exception) -> str:
    if isinstance(error, CreateFailedError):
        return error.phase
    return type(error).__name__
