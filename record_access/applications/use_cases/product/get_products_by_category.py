from record_access.applications.interfaces.dtos.filter_page import PageQuery
from record_access.applications.interfaces.dtos.product import ProductPage
from record_access.domain.exceptions import InvalidParameterError
from record_access.domain.models.query import FilterSpec
from record_access.domain.ports.repositories.product_repository import ProductRepository


class GetProductsByCategoryUseCase:
    def __init__(self, product_repository: ProductRepository):
        self.product_repository = product_repository

    async def execute(self, category_name: str, page_query: PageQuery) -> ProductPage:
        if not category_name:
            raise InvalidParameterError("category", "must not be empty")

        filter_spec = FilterSpec().eq_ci("category", category_name)
        page = await self.product_repository.paginate(filter_spec, page_query.to_page_request())
        return ProductPage.from_page(page)
