import uuid
from datetime import date
from typing import Any, Dict

from sqlalchemy import JSON
from sqlmodel import Field

from estoque.catalog.schemas import ProductBase


class ProductRecord(ProductBase, table=True):
    """Catalog product database model"""

    __tablename__ = "products"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    custom_fields: Dict[str, Any] = Field(default_factory=dict, sa_type=JSON)
    last_updated: date = Field(default_factory=date.today)
    setor_id: uuid.UUID = Field(foreign_key="setores.id", nullable=False, index=True, ondelete="CASCADE")
