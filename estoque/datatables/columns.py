"""
Column schemas for custom tables.

A table's column list is the single source of truth for which fields a
row may or must carry, and for how each captured value is coerced.
"""

import uuid
from collections import Counter
from datetime import date
from enum import Enum
from typing import Any, Iterable, List, Optional, Union

from pydantic import BaseModel, Field

Scalar = Union[str, int, float]

MIN_DRAFT_COLUMNS = 2


def fresh_id() -> str:
    return str(uuid.uuid4())


class ColumnType(str, Enum):
    TEXT = "text"
    NUMBER = "number"
    DATE = "date"


class Column(BaseModel):
    id: str = Field(default_factory=fresh_id)
    name: str = ""
    type: ColumnType = ColumnType.TEXT
    required: bool = False

    @property
    def is_valid(self) -> bool:
        return bool(self.name.strip())

    @property
    def is_quantity(self) -> bool:
        """Numeric columns named like a quantity get the +/- shortcuts."""
        return self.type == ColumnType.NUMBER and "quantidade" in self.name.lower()

    def default_value(self) -> Scalar:
        return 0 if self.type == ColumnType.NUMBER else ""

    def coerce(self, raw: Any) -> Scalar:
        if self.type == ColumnType.NUMBER:
            return to_number(raw)
        if raw is None:
            return ""
        if isinstance(raw, date):
            return raw.isoformat()
        return str(raw)


class CustomTable(BaseModel):
    id: str = Field(default_factory=fresh_id)
    name: str
    description: str = ""
    columns: List[Column] = Field(default_factory=list)
    created_at: date = Field(default_factory=date.today)

    def column(self, name: str) -> Optional[Column]:
        for column in self.columns:
            if column.name == name:
                return column
        return None


def to_number(raw: Any) -> Union[int, float]:
    """Numeric coercion with 0 as the fallback for anything unparsable."""
    if isinstance(raw, bool):
        return int(raw)
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        value = raw
    else:
        try:
            value = float(str(raw).strip().replace(",", "."))
        except (TypeError, ValueError):
            return 0
    if value != value or value in (float("inf"), float("-inf")):
        return 0
    return int(value) if value.is_integer() else value


def valid_columns(columns: Iterable[Column]) -> List[Column]:
    return [column for column in columns if column.is_valid]


def duplicate_names(columns: Iterable[Column]) -> List[str]:
    """Names used by more than one column. Rows keyed by name would collide."""
    counts = Counter(column.name.strip() for column in columns if column.is_valid)
    return [name for name, count in counts.items() if count > 1]


def seed_columns() -> List[Column]:
    return [
        Column(name="Nome", type=ColumnType.TEXT, required=True),
        Column(name="Quantidade", type=ColumnType.NUMBER, required=True),
    ]


class ColumnDraft:
    """Working column list used while defining a new table."""

    def __init__(self, columns: Optional[Iterable[Column]] = None):
        self.columns: List[Column] = list(columns) if columns is not None else seed_columns()

    def add(self) -> Column:
        column = Column()
        self.columns.append(column)
        return column

    def update(self, column_id: str, **fields: Any) -> Optional[Column]:
        for index, column in enumerate(self.columns):
            if column.id == column_id:
                updated = Column.model_validate({**column.model_dump(), **fields})
                self.columns[index] = updated
                return updated
        return None

    def remove(self, column_id: str) -> bool:
        if len(self.columns) <= MIN_DRAFT_COLUMNS:
            return False
        remaining = [column for column in self.columns if column.id != column_id]
        if len(remaining) == len(self.columns):
            return False
        self.columns = remaining
        return True

    def valid_columns(self) -> List[Column]:
        return valid_columns(self.columns)

    def reset(self) -> None:
        self.columns = seed_columns()

    def __len__(self) -> int:
        return len(self.columns)
