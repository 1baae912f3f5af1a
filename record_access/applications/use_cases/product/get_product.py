from typing import Union

from record_access.applications.interfaces.dtos.product import ProductPublic
from record_access.domain.models.query import NotFound
from record_access.domain.ports.repositories.product_repository import ProductRepository


class GetProductUseCase:
    def __init__(self, product_repository: ProductRepository):
        self.product_repository = product_repository

    async def execute(self, product_id: int) -> Union[ProductPublic, NotFound]:
        product = await self.product_repository.get_by_id(product_id)
        if isinstance(product, NotFound):
            return product

        return ProductPublic.model_validate(product, from_attributes=True)
