from record_access.applications.interfaces.dtos.product import ProductPage, ProductSearch
from record_access.domain.exceptions import InvalidParameterError
from record_access.domain.models.query import FilterSpec
from record_access.domain.ports.repositories.product_repository import ProductRepository

SEARCH_FIELDS = ("name", "description")


class SearchProductsUseCase:
    def __init__(self, product_repository: ProductRepository):
        self.product_repository = product_repository

    async def execute(self, search: ProductSearch) -> ProductPage:
        if not search.search_term or not search.search_term.strip():
            raise InvalidParameterError("search_term", "must not be empty")

        filter_spec = FilterSpec().contains(SEARCH_FIELDS, search.search_term)
        page = await self.product_repository.paginate(filter_spec, search.to_page_request())
        return ProductPage.from_page(page)
