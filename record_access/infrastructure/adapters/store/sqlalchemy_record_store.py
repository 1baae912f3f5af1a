import asyncio
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Awaitable, List, Optional, TypeVar

from sqlalchemy.exc import DBAPIError, InterfaceError, OperationalError, StatementError
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine

from record_access.domain.exceptions import StoreCommandError, StoreTimeoutError, StoreUnavailableError
from record_access.domain.ports.repositories.record_store import CommandResult, RecordStore, Row, StoreTransaction
from record_access.domain.ports.services.logger import LoggerPort
from record_access.infrastructure.logging.std_logger_adapter import StdLoggerAdapter

T = TypeVar("T")


class SQLAlchemyRecordStore(RecordStore):
    """``RecordStore`` over an ``AsyncEngine``.

    Each call runs under ``asyncio.wait_for`` and driver errors are translated
    into the store error kinds. Messages carry the driver error class only,
    since driver messages may quote bound values.
    """

    def __init__(
        self,
        engine: AsyncEngine,
        default_timeout: float = 5.0,
        use_returning: Optional[bool] = None,
        logger: Optional[LoggerPort] = None,
    ):
        self.engine = engine
        self.default_timeout = default_timeout
        self.supports_returning = engine.dialect.insert_returning if use_returning is None else use_returning
        self.logger = logger or StdLoggerAdapter(__name__)

    async def fetch_all(self, statement: Any, timeout: Optional[float] = None) -> List[Row]:
        async def run() -> List[Row]:
            async with self.engine.connect() as connection:
                result = await connection.execute(statement)
                return [dict(row) for row in result.mappings()]

        return await self.guard(run(), timeout)

    async def fetch_scalar(self, statement: Any, timeout: Optional[float] = None) -> Any:
        async def run() -> Any:
            async with self.engine.connect() as connection:
                return await connection.scalar(statement)

        return await self.guard(run(), timeout)

    @asynccontextmanager
    async def begin(self, timeout: Optional[float] = None) -> AsyncIterator[StoreTransaction]:
        connection = self.engine.connect()
        try:
            await self.guard(connection.start(), timeout)
            transaction = _SQLAlchemyTransaction(self, connection, timeout)
            try:
                yield transaction
                if not transaction.finished:
                    await transaction.commit()
            except BaseException:
                if not transaction.finished:
                    await transaction.rollback_after_error()
                raise
        finally:
            # A start that failed or timed out leaves nothing to close.
            if connection.sync_connection is not None:
                await connection.close()

    async def guard(self, awaitable: Awaitable[T], timeout: Optional[float] = None) -> T:
        limit = self.default_timeout if timeout is None else timeout
        try:
            return await asyncio.wait_for(awaitable, limit)
        except asyncio.TimeoutError as e:
            self.logger.warning("Store call timed out after %ss", limit)
            raise StoreTimeoutError(limit) from e
        except (OperationalError, InterfaceError) as e:
            self.logger.error("Store unavailable: %s", type(e.orig).__name__)
            raise StoreUnavailableError(f"Record store unavailable ({type(e.orig).__name__})") from e
        except DBAPIError as e:
            if e.connection_invalidated:
                raise StoreUnavailableError(f"Record store connection lost ({type(e.orig).__name__})") from e
            raise StoreCommandError(f"Statement rejected by store ({type(e.orig).__name__})") from e
        except (StatementError, OverflowError) as e:
            # Bound values the driver could not convert, e.g. an integer wider than the column.
            cause = e.orig if isinstance(e, StatementError) and e.orig is not None else e
            raise StoreCommandError(f"Statement rejected by store ({type(cause).__name__})") from e
        except (ConnectionError, OSError) as e:
            self.logger.error("Store unavailable: %s", type(e).__name__)
            raise StoreUnavailableError(f"Record store unavailable ({type(e).__name__})") from e


class _SQLAlchemyTransaction(StoreTransaction):
    def __init__(self, store: SQLAlchemyRecordStore, connection: AsyncConnection, timeout: Optional[float]):
        self._store = store
        self._connection = connection
        self._timeout = timeout
        self.finished = False

    async def fetch_all(self, statement: Any) -> List[Row]:
        result = await self._store.guard(self._connection.execute(statement), self._timeout)
        return [dict(row) for row in result.mappings()]

    async def execute(self, statement: Any) -> CommandResult:
        result = await self._store.guard(self._connection.execute(statement), self._timeout)
        rows = [dict(row) for row in result.mappings()] if result.returns_rows else []

        inserted_primary_key = None
        if getattr(statement, "is_insert", False) and not rows:
            inserted_primary_key = tuple(result.inserted_primary_key or ())
        return CommandResult(rowcount=result.rowcount, inserted_primary_key=inserted_primary_key, rows=rows)

    async def commit(self) -> None:
        await self._store.guard(self._connection.commit(), self._timeout)
        self.finished = True

    async def rollback(self) -> None:
        await self._store.guard(self._connection.rollback(), self._timeout)
        self.finished = True

    async def rollback_after_error(self) -> None:
        # The original error is what the caller needs; a failed rollback is
        # logged and the connection is discarded on close.
        try:
            await self.rollback()
        except Exception:
            self._store.logger.exception("Rollback failed")
