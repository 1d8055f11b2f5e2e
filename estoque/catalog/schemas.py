import uuid
from datetime import date
from typing import Any, Dict, List, Optional

from pydantic import BaseModel
from sqlmodel import Field, SQLModel

from estoque.notifications import Notification


# Shared properties
class ProductBase(SQLModel):
    name: str = Field(max_length=255)
    category: str = Field(max_length=255, index=True)
    quantity: int = Field(default=0, ge=0)
    location: str = Field(default="", max_length=255)
    min_stock: int = Field(default=0, ge=0)


class ProductCreate(ProductBase):
    custom_fields: Dict[str, Any] = {}


class ProductUpdate(SQLModel):
    name: Optional[str] = Field(default=None, max_length=255)
    category: Optional[str] = Field(default=None, max_length=255)
    quantity: Optional[int] = None
    location: Optional[str] = Field(default=None, max_length=255)
    min_stock: Optional[int] = Field(default=None, ge=0)
    custom_fields: Optional[Dict[str, Any]] = None


class ProductPublic(ProductBase):
    id: uuid.UUID
    custom_fields: Dict[str, Any] = {}
    last_updated: date
    setor_id: uuid.UUID
    low_stock: bool = False


class ProductsPublic(SQLModel):
    data: List[ProductPublic]
    count: int


class QuantityChange(BaseModel):
    delta: int


class ProductResult(BaseModel):
    notification: Notification
    data: Optional[ProductPublic] = None


class StockOverview(SQLModel):
    products: int
    low_stock: int
    low_stock_items: List[ProductPublic]
