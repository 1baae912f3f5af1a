from record_access.applications.interfaces.dtos.product import ProductPage, ProductQuery
from record_access.domain.models.query import FilterSpec
from record_access.domain.ports.repositories.product_repository import ProductRepository


class GetProductsUseCase:
    def __init__(self, product_repository: ProductRepository):
        self.product_repository = product_repository

    async def execute(self, query: ProductQuery) -> ProductPage:
        # Price bounds are inclusive; min above max is allowed and yields an empty page.
        filter_spec = (
            FilterSpec()
            .eq("category", query.category)
            .gte("price", query.min_price)
            .lte("price", query.max_price)
        )
        page = await self.product_repository.paginate(filter_spec, query.to_page_request())
        return ProductPage.from_page(page)
