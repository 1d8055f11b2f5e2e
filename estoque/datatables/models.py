import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import JSON
from sqlmodel import Field, Relationship, SQLModel

from estoque.utils.dates import Timestamp, utcnow


class DataTable(SQLModel, table=True):
    __tablename__ = "custom_tables"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    name: str = Field(max_length=255)
    description: Optional[str] = None
    columns: List[Dict[str, Any]] = Field(default_factory=list, sa_type=JSON)
    created_at: datetime = Field(default_factory=utcnow, sa_type=Timestamp)
    updated_at: datetime = Field(default_factory=utcnow, sa_type=Timestamp)
    setor_id: uuid.UUID = Field(foreign_key="setores.id", nullable=False, index=True, ondelete="CASCADE")
    owner_id: Optional[uuid.UUID] = Field(default=None, foreign_key="user.id", ondelete="SET NULL")

    rows: List["DataTableRow"] = Relationship(back_populates="table", cascade_delete=True)


class DataTableRow(SQLModel, table=True):
    __tablename__ = "table_products"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    table_id: uuid.UUID = Field(foreign_key="custom_tables.id", nullable=False, index=True, ondelete="CASCADE")
    setor_id: uuid.UUID = Field(foreign_key="setores.id", nullable=False, index=True, ondelete="CASCADE")
    data: Dict[str, Any] = Field(default_factory=dict, sa_type=JSON)
    created_at: datetime = Field(default_factory=utcnow, sa_type=Timestamp)
    updated_at: datetime = Field(default_factory=utcnow, sa_type=Timestamp)

    table: DataTable = Relationship(back_populates="rows")
