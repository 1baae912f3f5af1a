from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from record_access.domain.ports.repositories.product_repository import ProductRepository
from record_access.domain.ports.repositories.record_store import RecordStore
from record_access.domain.ports.repositories.user_repository import UserRepository
from record_access.domain.ports.services.logger import LoggerPort
from record_access.infrastructure.adapters.repositories.sqlalchemy_product_repository import (
    SQLAlchemyProductRepository,
)
from record_access.infrastructure.adapters.repositories.sqlalchemy_user_repository import SQLAlchemyUserRepository
from record_access.infrastructure.adapters.store.sqlalchemy_record_store import SQLAlchemyRecordStore
from record_access.infrastructure.config.settings import Settings
from record_access.infrastructure.logging.std_logger_adapter import StdLoggerAdapter
from record_access.infrastructure.persistence.database import get_engine


def get_logger() -> LoggerPort:
    return StdLoggerAdapter(__name__)


@lru_cache
def get_settings() -> Settings:
    return Settings()


def get_record_store(
    settings: Annotated[Settings, Depends(get_settings)],
    logger: Annotated[LoggerPort, Depends(get_logger)],
) -> RecordStore:
    return SQLAlchemyRecordStore(get_engine(), default_timeout=settings.STORE_TIMEOUT_SECONDS, logger=logger)


def get_product_repository(
    store: Annotated[RecordStore, Depends(get_record_store)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> ProductRepository:
    return SQLAlchemyProductRepository(store, max_page_size=settings.MAX_PAGE_SIZE)


def get_user_repository(
    store: Annotated[RecordStore, Depends(get_record_store)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> UserRepository:
    return SQLAlchemyUserRepository(
        store,
        username_max_length=settings.USERNAME_MAX_LENGTH,
        password_hash_max_length=settings.PASSWORD_HASH_MAX_LENGTH,
    )
