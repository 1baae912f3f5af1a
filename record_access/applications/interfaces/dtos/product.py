from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from record_access.applications.interfaces.dtos.filter_page import PageQuery
from record_access.domain.models.product import Product
from record_access.domain.models.query import PageResult


class ProductSchema(BaseModel):
    name: str = Field(min_length=3, max_length=100)
    description: Optional[str] = Field(default=None, max_length=1000)
    price: Decimal = Field(gt=0, max_digits=12, decimal_places=2)
    category: str = Field(min_length=1, max_length=64)
    in_stock: bool = False


class ProductPublic(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    price: Decimal
    category: str
    in_stock: bool
    created_date: datetime
    is_active: bool
    model_config = ConfigDict(from_attributes=True)


class ProductQuery(PageQuery):
    category: Optional[str] = None
    min_price: Optional[Decimal] = None
    max_price: Optional[Decimal] = None


class ProductSearch(PageQuery):
    search_term: str = ""


class ProductPage(BaseModel):
    products: List[ProductPublic]
    total_count: int
    total_filtered_count: int
    page: int
    page_size: int
    total_pages: int

    @classmethod
    def from_page(cls, page: PageResult[Product]) -> "ProductPage":
        return cls(
            products=[ProductPublic.model_validate(product, from_attributes=True) for product in page.items],
            total_count=page.unfiltered_total,
            total_filtered_count=page.filtered_total,
            page=page.page,
            page_size=page.page_size,
            total_pages=page.total_pages,
        )
