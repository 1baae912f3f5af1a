from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.sql.elements import ColumnElement

from record_access.applications.query.entity_schema import EntitySchema
from record_access.domain.exceptions import InvalidPageRequestError, MissingOrderingKeyError
from record_access.domain.models.parameter import INT64_MAX
from record_access.domain.models.query import PageRequest, PageResult
from record_access.domain.ports.repositories.record_store import RecordStore, Row
from record_access.domain.ports.services.logger import LoggerPort
from record_access.infrastructure.logging.std_logger_adapter import StdLoggerAdapter


class Pager:
    """Offset pagination with store-side counts.

    ``filtered_total`` and ``unfiltered_total`` are two independent ``COUNT(*)``
    statements; a write landing between them is visible in one and not the
    other. Each statement on its own is consistent.
    """

    def __init__(
        self,
        store: RecordStore,
        schema: EntitySchema,
        max_page_size: Optional[int] = None,
        timeout: Optional[float] = None,
        logger: Optional[LoggerPort] = None,
    ):
        self.store = store
        self.schema = schema
        self.max_page_size = max_page_size
        self.timeout = timeout
        self.logger = logger or StdLoggerAdapter(__name__, entity=schema.name)

    def check(self, page_request: PageRequest) -> None:
        if page_request.page < 1:
            raise InvalidPageRequestError(f"page must be >= 1, got {page_request.page}")
        if page_request.page_size < 1:
            raise InvalidPageRequestError(f"page_size must be >= 1, got {page_request.page_size}")
        if self.max_page_size is not None and page_request.page_size > self.max_page_size:
            raise InvalidPageRequestError(f"page_size must be <= {self.max_page_size}, got {page_request.page_size}")
        if page_request.page_size > INT64_MAX or page_request.offset > INT64_MAX:
            raise InvalidPageRequestError("page and page_size address rows beyond the store's range")
        if self.schema.ordering_key is None:
            raise MissingOrderingKeyError(f"{self.schema.name} has no ordering key; offset pagination is unstable")

    async def paginate(
        self, predicate: Optional[ColumnElement[bool]], page_request: PageRequest
    ) -> PageResult[Row]:
        self.check(page_request)

        table = self.schema.table
        ordering = self.schema.readable_column(self.schema.ordering_key)

        filtered_count = select(func.count()).select_from(table)
        items = select(*self.schema.projection()).select_from(table)
        if predicate is not None:
            filtered_count = filtered_count.where(predicate)
            items = items.where(predicate)
        items = items.order_by(ordering.asc()).offset(page_request.offset).limit(page_request.page_size)

        filtered_total = await self.store.fetch_scalar(filtered_count, timeout=self.timeout)
        unfiltered_total = await self.store.fetch_scalar(select(func.count()).select_from(table), timeout=self.timeout)
        rows = await self.store.fetch_all(items, timeout=self.timeout)

        self.logger.debug(
            "Paged %s: page=%s size=%s returned=%s filtered=%s total=%s",
            self.schema.name,
            page_request.page,
            page_request.page_size,
            len(rows),
            filtered_total,
            unfiltered_total,
        )

        return PageResult[Row](
            items=rows,
            filtered_total=filtered_total or 0,
            unfiltered_total=unfiltered_total or 0,
            page=page_request.page,
            page_size=page_request.page_size,
        )
