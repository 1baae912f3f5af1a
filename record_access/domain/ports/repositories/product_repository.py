from abc import ABC, abstractmethod
from typing import Union

from record_access.domain.models.creation import CreateResult
from record_access.domain.models.product import NewProduct, Product
from record_access.domain.models.query import FilterSpec, NotFound, PageRequest, PageResult


class ProductRepository(ABC):
    @abstractmethod
    async def get_by_id(self, product_id: int) -> Union[Product, NotFound]:
        pass

    @abstractmethod
    async def paginate(self, filter_spec: FilterSpec, page_request: PageRequest) -> PageResult[Product]:
        pass

    @abstractmethod
    async def create(self, product: NewProduct) -> CreateResult[Product]:
        pass
