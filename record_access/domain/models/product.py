from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel


class Product(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    price: Decimal
    category: str
    in_stock: bool = False
    created_date: datetime
    is_active: bool = True


class NewProduct(BaseModel):
    name: str
    description: Optional[str] = None
    price: Decimal
    category: str
    in_stock: bool = False
