from datetime import date
from typing import Any, Dict, Iterable, Iterator, List, Optional

from pydantic import BaseModel, Field

from estoque.datatables.columns import fresh_id, to_number


class TableRow(BaseModel):
    id: str = Field(default_factory=fresh_id)
    table_id: str
    data: Dict[str, Any] = Field(default_factory=dict)
    created_at: date = Field(default_factory=date.today)


def clamp_quantity(current: Any, delta: float):
    """``max(0, current + delta)``, reading anything non-numeric as 0."""
    value = to_number(current) if current is not None else 0
    return to_number(max(0, value + delta))


class RowStore:
    """
    Ordered, in-memory rows of exactly one table.

    Rows are swapped wholesale through ``load`` when the active table changes.
    Unknown ids make update/remove/adjust no-ops.
    """

    def __init__(self, table_id: Optional[str] = None, rows: Iterable[TableRow] = ()):
        self.table_id = table_id
        self._rows: List[TableRow] = list(rows)

    def load(self, table_id: Optional[str], rows: Iterable[TableRow] = ()) -> None:
        self.table_id = table_id
        self._rows = list(rows)

    def clear(self) -> None:
        self.load(None)

    @property
    def rows(self) -> List[TableRow]:
        return list(self._rows)

    def get(self, row_id: str) -> Optional[TableRow]:
        for row in self._rows:
            if row.id == row_id:
                return row
        return None

    def add(self, row: TableRow) -> TableRow:
        self._rows.append(row)
        return row

    def update(self, row_id: str, new_data: Dict[str, Any]) -> Optional[TableRow]:
        for index, row in enumerate(self._rows):
            if row.id == row_id:
                updated = row.model_copy(update={"data": dict(new_data)})
                self._rows[index] = updated
                return updated
        return None

    def remove(self, row_id: str) -> Optional[TableRow]:
        removed = self.get(row_id)
        self._rows = [row for row in self._rows if row.id != row_id]
        return removed

    def adjust_quantity(self, row_id: str, column_name: str, delta: float) -> Optional[TableRow]:
        row = self.get(row_id)
        if row is None:
            return None
        data = dict(row.data)
        data[column_name] = clamp_quantity(data.get(column_name), delta)
        return self.update(row_id, data)

    def __iter__(self) -> Iterator[TableRow]:
        return iter(list(self._rows))

    def __len__(self) -> int:
        return len(self._rows)
