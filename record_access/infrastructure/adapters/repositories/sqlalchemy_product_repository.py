from typing import Optional, Union

from record_access.applications.query.atomic_creator import AtomicCreator
from record_access.applications.query.pager import Pager
from record_access.applications.query.predicate_composer import PredicateComposer
from record_access.applications.query.record_reader import RecordReader
from record_access.domain.models.creation import CreateResult
from record_access.domain.models.product import NewProduct, Product
from record_access.domain.models.query import FilterSpec, NotFound, PageRequest, PageResult
from record_access.domain.ports.repositories.product_repository import ProductRepository
from record_access.domain.ports.repositories.record_store import RecordStore, Row
from record_access.infrastructure.persistence.schemas import PRODUCT_SCHEMA


class SQLAlchemyProductRepository(ProductRepository):
    def __init__(self, store: RecordStore, max_page_size: Optional[int] = None, timeout: Optional[float] = None):
        self.store = store
        self.composer = PredicateComposer(PRODUCT_SCHEMA)
        self.pager = Pager(store, PRODUCT_SCHEMA, max_page_size=max_page_size, timeout=timeout)
        self.reader = RecordReader(store, PRODUCT_SCHEMA, timeout=timeout)
        self.creator = AtomicCreator(store, PRODUCT_SCHEMA, timeout=timeout)

    def _to_domain(self, row: Row) -> Product:
        return Product(
            id=row["id"],
            name=row["name"],
            description=row["description"],
            price=row["price"],
            category=row["category"],
            in_stock=row["in_stock"],
            created_date=row["created_date"],
            is_active=row["is_active"],
        )

    async def get_by_id(self, product_id: int) -> Union[Product, NotFound]:
        row = await self.reader.get_by_id(product_id)
        return row if isinstance(row, NotFound) else self._to_domain(row)

    async def paginate(self, filter_spec: FilterSpec, page_request: PageRequest) -> PageResult[Product]:
        # Reject a bad page before composing so nothing reaches the store.
        self.pager.check(page_request)
        predicate = self.composer.compose(filter_spec)
        page = await self.pager.paginate(predicate, page_request)
        return PageResult[Product](
            items=[self._to_domain(row) for row in page.items],
            filtered_total=page.filtered_total,
            unfiltered_total=page.unfiltered_total,
            page=page.page,
            page_size=page.page_size,
        )

    async def create(self, product: NewProduct) -> CreateResult[Product]:
        result = await self.creator.create(product.model_dump())
        return CreateResult[Product](record=self._to_domain(result.record), state=result.state)
