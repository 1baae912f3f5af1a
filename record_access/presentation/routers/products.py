from http import HTTPStatus
from typing import Annotated

from fastapi import APIRouter, Depends, Query

from record_access.applications.interfaces.dtos.filter_page import PageQuery
from record_access.applications.interfaces.dtos.product import (
    ProductPage,
    ProductPublic,
    ProductQuery,
    ProductSchema,
    ProductSearch,
)
from record_access.applications.use_cases.product.create_product import CreateProductUseCase
from record_access.applications.use_cases.product.get_product import GetProductUseCase
from record_access.applications.use_cases.product.get_products import GetProductsUseCase
from record_access.applications.use_cases.product.get_products_by_category import GetProductsByCategoryUseCase
from record_access.applications.use_cases.product.search_products import SearchProductsUseCase
from record_access.domain.models.query import NotFound
from record_access.domain.ports.repositories.product_repository import ProductRepository
from record_access.infrastructure.config.dependencies import get_product_repository
from record_access.presentation.error_handlers import not_found_response

router = APIRouter(prefix="/products", tags=["products"])

ProductRepositoryDep = Annotated[ProductRepository, Depends(get_product_repository)]


@router.get("/", response_model=ProductPage)
async def read_products(query: Annotated[ProductQuery, Query()], product_repository: ProductRepositoryDep):
    use_case = GetProductsUseCase(product_repository)
    return await use_case.execute(query)


@router.get("/search", response_model=ProductPage)
async def search_products(search: Annotated[ProductSearch, Query()], product_repository: ProductRepositoryDep):
    use_case = SearchProductsUseCase(product_repository)
    return await use_case.execute(search)


@router.get("/category/{category_name}", response_model=ProductPage)
async def read_products_by_category(
    category_name: str, page_query: Annotated[PageQuery, Query()], product_repository: ProductRepositoryDep
):
    use_case = GetProductsByCategoryUseCase(product_repository)
    return await use_case.execute(category_name, page_query)


@router.get("/{product_id}", response_model=ProductPublic)
async def read_product(product_id: int, product_repository: ProductRepositoryDep):
    use_case = GetProductUseCase(product_repository)
    result = await use_case.execute(product_id)
    if isinstance(result, NotFound):
        return not_found_response(result)
    return result


@router.post("/", status_code=HTTPStatus.CREATED, response_model=ProductPublic)
async def create_product(product: ProductSchema, product_repository: ProductRepositoryDep):
    use_case = CreateProductUseCase(product_repository)
    return await use_case.execute(product)
