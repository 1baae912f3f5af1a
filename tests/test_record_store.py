import asyncio

import pytest
from sqlalchemy import bindparam, func, insert, select
from sqlalchemy.exc import StatementError
from sqlalchemy.ext.asyncio import create_async_engine

from record_access.domain.exceptions import StoreCommandError, StoreTimeoutError, StoreUnavailableError
from record_access.infrastructure.adapters.store.sqlalchemy_record_store import SQLAlchemyRecordStore
from record_access.infrastructure.persistence.tables import products, users

from .factories import user_factory


def user_row(username="bob"):
    data = user_factory.create_user_data(username=username, email=f"{username}@example.com")
    return {"username": data["username"], "email": data["email"], "password": data["password_hash"]}


class TestSQLAlchemyRecordStore:
    @pytest.mark.asyncio
    async def test_slow_call_times_out(self, store):
        with pytest.raises(StoreTimeoutError) as exc_info:
            await store.guard(asyncio.sleep(1), timeout=0.01)

        assert exc_info.value.timeout == 0.01

    @pytest.mark.asyncio
    async def test_unreachable_database_is_unavailable(self):
        engine = create_async_engine("sqlite+aiosqlite:////nonexistent/dir/db.sqlite")
        store = SQLAlchemyRecordStore(engine)

        try:
            with pytest.raises(StoreUnavailableError):
                await store.fetch_scalar(select(func.count()).select_from(users))
        finally:
            await engine.dispose()

    @pytest.mark.asyncio
    async def test_constraint_violation_is_a_command_error(self, store):
        async with store.begin() as transaction:
            await transaction.execute(insert(users).values(**user_row()))

        with pytest.raises(StoreCommandError) as exc_info:
            async with store.begin() as transaction:
                await transaction.execute(insert(users).values(**user_row()))

        assert "bob" not in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_transaction_commits_on_success(self, store):
        async with store.begin() as transaction:
            result = await transaction.execute(insert(users).values(**user_row()))

        assert result.rowcount == 1
        assert await store.fetch_scalar(select(func.count()).select_from(users)) == 1

    @pytest.mark.asyncio
    async def test_transaction_rolls_back_on_error(self, store):
        with pytest.raises(ValueError):
            async with store.begin() as transaction:
                await transaction.execute(insert(users).values(**user_row()))
                raise ValueError("abort")

        assert await store.fetch_scalar(select(func.count()).select_from(users)) == 0

    @pytest.mark.asyncio
    async def test_insert_without_returning_reports_generated_key(self, store):
        async with store.begin() as transaction:
            result = await transaction.execute(insert(users).values(**user_row()))

        assert result.rows == []
        assert result.inserted_primary_key[0] is not None

    @pytest.mark.asyncio
    async def test_integer_too_wide_for_driver_is_a_command_error(self, store, seeded_products):
        statement = select(products.c.id).where(products.c.id == bindparam("id", 2**63))

        with pytest.raises(StoreCommandError):
            await store.fetch_all(statement)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [
            OverflowError("int too large"),
            StatementError("could not process parameters", "SELECT 1", {}, ValueError("bad value")),
        ],
    )
    async def test_non_driver_errors_are_command_errors(self, store, error):
        async def failing():
            raise error

        with pytest.raises(StoreCommandError) as exc_info:
            await store.guard(failing())

        assert exc_info.value.__cause__ is error

    @pytest.mark.asyncio
    async def test_begin_on_unreachable_database_releases_nothing(self):
        """A connection that never started is not closed a second time"""
        engine = create_async_engine("sqlite+aiosqlite:////nonexistent/dir/db.sqlite")
        store = SQLAlchemyRecordStore(engine)

        try:
            with pytest.raises(StoreUnavailableError):
                async with store.begin():
                    pass
        finally:
            await engine.dispose()

    @pytest.mark.asyncio
    async def test_begin_that_times_out_while_connecting(self):
        store = SQLAlchemyRecordStore(StalledEngine(), use_returning=False)

        with pytest.raises(StoreTimeoutError):
            async with store.begin(timeout=0.01):
                pass


class StalledConnection:
    """Connection whose start never completes; closing it is an error"""

    sync_connection = None

    async def start(self):
        await asyncio.sleep(1)

    async def close(self):
        raise AssertionError("closed a connection that never started")


class StalledEngine:
    def connect(self):
        return StalledConnection()
