import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, computed_field

from estoque.datatables.columns import Column
from estoque.notifications import Notification


class DataTableCreate(BaseModel):
    name: str = ""
    description: Optional[str] = None
    columns: List[Column] = []


class DataTableResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    description: Optional[str] = None
    columns: List[Column]
    created_at: datetime
    updated_at: datetime
    setor_id: uuid.UUID
    row_count: int = 0

    @computed_field  # type: ignore[prop-decorator]
    @property
    def quantity_columns(self) -> List[str]:
        """Numeric columns offered the +/- quantity shortcuts."""
        return [column.name for column in self.columns if column.is_quantity]


class DataTableRowWrite(BaseModel):
    data: Dict[str, Any]


class DataTableRowResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    table_id: uuid.UUID
    data: Dict[str, Any]
    created_at: datetime
    updated_at: datetime


class QuantityAdjust(BaseModel):
    column: str
    delta: float


class TableResult(BaseModel):
    notification: Notification
    data: Optional[DataTableResponse] = None


class RowResult(BaseModel):
    notification: Notification
    data: Optional[DataTableRowResponse] = None


class DeleteResult(BaseModel):
    notification: Notification
