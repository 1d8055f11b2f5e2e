"""
Schema-driven form state for custom table rows.

A single traversal over the column list initialises, coerces and
validates values, whatever the table looks like.
"""

from typing import (
    AbstractSet,
    Any,
    Callable,
    Dict,
    List,
    Mapping,
    Optional,
    Sequence,
    Set,
    TypeVar,
)

from estoque.datatables.columns import Column, ColumnType
from estoque.errors import RequiredFieldsMissing

T = TypeVar("T")


def is_missing(value: Any, column: Column, treat_zero_as_missing: bool = True) -> bool:
    if value is None or value == "":
        return True
    # A required number of 0 is rejected unless the relaxed policy is requested
    if treat_zero_as_missing and column.type == ColumnType.NUMBER and value == 0:
        return True
    return False


def missing_fields(
    columns: Sequence[Column],
    values: Mapping[str, Any],
    treat_zero_as_missing: bool = True,
    supplied: Optional[AbstractSet[str]] = None,
) -> List[str]:
    """
    Names of the required columns with no value, in column order.

    When ``supplied`` is given, a required column whose name is not in it
    counts as missing even if ``values`` holds a default for it.
    """
    return [
        column.name
        for column in columns
        if column.required
        and (
            (supplied is not None and column.name not in supplied)
            or is_missing(values.get(column.name), column, treat_zero_as_missing)
        )
    ]


def initial_values(
    columns: Sequence[Column], data: Optional[Mapping[str, Any]] = None
) -> Dict[str, Any]:
    values: Dict[str, Any] = {}
    for column in columns:
        current = data.get(column.name) if data else None
        # falsy stored values fall back to the column default
        values[column.name] = current if current else column.default_value()
    return values


class FormBinder:
    """
    Editable field state for one row of a table.

    Built from the table's columns and, when editing, the existing row data.
    ``submit`` validates the required columns and hands the values to a
    callback, clearing the working state only when that succeeds.

    By default a required number of 0 is missing. ``treat_zero_as_missing=False``
    accepts 0, but a required column must still have been supplied, either by
    the existing row or through ``set``.
    """

    def __init__(
        self,
        columns: Sequence[Column],
        data: Optional[Mapping[str, Any]] = None,
        treat_zero_as_missing: bool = True,
    ):
        self.columns = list(columns)
        self.treat_zero_as_missing = treat_zero_as_missing
        self.values: Dict[str, Any] = initial_values(self.columns, data)
        self.supplied: Set[str] = {
            name for name, value in (data or {}).items() if value is not None
        }

    def _column(self, name: str) -> Optional[Column]:
        for column in self.columns:
            if column.name == name:
                return column
        return None

    def set(self, name: str, raw: Any) -> Any:
        column = self._column(name)
        value = column.coerce(raw) if column is not None else raw
        self.values[name] = value
        if raw is not None:
            self.supplied.add(name)
        return value

    def update(self, raw_values: Mapping[str, Any]) -> None:
        for name, raw in raw_values.items():
            self.set(name, raw)

    def missing_fields(self) -> List[str]:
        return missing_fields(
            self.columns, self.values, self.treat_zero_as_missing, self.supplied
        )

    def validate(self) -> Dict[str, Any]:
        missing = self.missing_fields()
        if missing:
            raise RequiredFieldsMissing(missing)
        return dict(self.values)

    def submit(self, on_valid: Callable[[Dict[str, Any]], T]) -> T:
        result = on_valid(self.validate())
        self.clear()
        return result

    def clear(self) -> None:
        self.values = {}
        self.supplied = set()
