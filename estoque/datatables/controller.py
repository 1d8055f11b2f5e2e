import logging
from datetime import date
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from estoque.datatables.columns import Column, CustomTable, duplicate_names, valid_columns
from estoque.datatables.forms import FormBinder
from estoque.datatables.rows import RowStore, TableRow
from estoque.errors import RequiredFieldsMissing
from estoque.notifications import Notifier

logger = logging.getLogger(__name__)


class TableController:
    """
    Custom tables and the rows of the selected one.

    Every mutating call ends in exactly one notification and never raises:
    failures become error notifications and the previous state is kept.
    """

    def __init__(
        self,
        tables: Iterable[CustomTable] = (),
        seeds: Optional[Mapping[str, Sequence[TableRow]]] = None,
        notifier: Optional[Notifier] = None,
        treat_zero_as_missing: bool = True,
    ):
        self.tables: List[CustomTable] = list(tables)
        self.seeds: Dict[str, Sequence[TableRow]] = dict(seeds or {})
        self.notifier = notifier or Notifier()
        self.treat_zero_as_missing = treat_zero_as_missing
        self.store = RowStore()
        self.selected: Optional[CustomTable] = None

    def get_table(self, table_id: str) -> Optional[CustomTable]:
        for table in self.tables:
            if table.id == table_id:
                return table
        return None

    @property
    def rows(self) -> List[TableRow]:
        return self.store.rows

    # --- Tables ---

    def create_table(
        self, name: str, description: str = "", columns: Sequence[Column] = ()
    ) -> Optional[CustomTable]:
        if not (name or "").strip():
            self.notifier.error("Erro", "Nome da tabela é obrigatório")
            return None

        kept = valid_columns(columns)
        if not kept:
            self.notifier.error("Erro", "Pelo menos uma coluna deve ser definida")
            return None

        duplicates = duplicate_names(kept)
        if duplicates:
            logger.warning(f"Table '{name}' repeats column names: {duplicates}")

        try:
            table = CustomTable(
                name=name,
                description=description or "",
                columns=[column.model_copy() for column in kept],
                created_at=date.today(),
            )
        except Exception as e:
            self.notifier.error("Erro ao criar tabela", str(e))
            return None

        self.tables.append(table)
        self.notifier.success("Sucesso", "Tabela criada com sucesso!")
        return table

    def delete_table(self, table_id: str) -> None:
        self.tables = [table for table in self.tables if table.id != table_id]
        self.seeds.pop(table_id, None)
        if self.selected is not None and self.selected.id == table_id:
            self.close_table()
        self.notifier.success("Tabela removida", "A tabela foi removida com sucesso")

    def select_table(self, table_id: str) -> Optional[CustomTable]:
        table = self.get_table(table_id)
        if table is None:
            self.close_table()
            return None
        self.selected = table
        self.store.load(
            table.id, [row.model_copy(deep=True) for row in self.seeds.get(table.id, ())]
        )
        return table

    def close_table(self) -> None:
        self.selected = None
        self.store.clear()

    # --- Rows ---

    def _binder(self, data: Optional[Mapping[str, Any]] = None) -> FormBinder:
        return FormBinder(
            self.selected.columns, data, treat_zero_as_missing=self.treat_zero_as_missing
        )

    def _require_selection(self) -> bool:
        if self.selected is None:
            self.notifier.error("Erro", "Nenhuma tabela selecionada")
            return False
        return True

    def add_row(self, values: Mapping[str, Any]) -> Optional[TableRow]:
        if not self._require_selection():
            return None
        binder = self._binder()
        try:
            binder.update(values)
            row = binder.submit(
                lambda data: self.store.add(TableRow(table_id=self.selected.id, data=data))
            )
        except RequiredFieldsMissing as e:
            self.notifier.error("Erro", str(e))
            return None
        except Exception as e:
            logger.exception("Failed to add row")
            self.notifier.error("Erro ao adicionar item", str(e))
            return None
        self.notifier.success("Sucesso", "Item adicionado com sucesso!")
        return row

    def edit_row(self, row_id: str, values: Mapping[str, Any]) -> Optional[TableRow]:
        if not self._require_selection():
            return None
        current = self.store.get(row_id)
        if current is None:
            self.notifier.error("Erro", "Item não encontrado")
            return None
        binder = self._binder(current.data)
        try:
            binder.update(values)
            row = binder.submit(lambda data: self.store.update(row_id, data))
        except RequiredFieldsMissing as e:
            self.notifier.error("Erro", str(e))
            return None
        except Exception as e:
            logger.exception("Failed to edit row")
            self.notifier.error("Erro ao atualizar item", str(e))
            return None
        self.notifier.success("Sucesso", "Item atualizado com sucesso!")
        return row

    def delete_row(self, row_id: str) -> Optional[TableRow]:
        removed = self.store.remove(row_id)
        self.notifier.success("Item removido", "O item foi removido com sucesso")
        return removed

    def adjust_row_quantity(
        self, row_id: str, column_name: str, delta: float
    ) -> Optional[TableRow]:
        try:
            row = self.store.adjust_quantity(row_id, column_name, delta)
        except Exception as e:
            self.notifier.error("Erro ao ajustar quantidade", str(e))
            return None
        if row is None:
            self.notifier.error("Erro", "Item não encontrado")
            return None
        self.notifier.success(
            "Quantidade atualizada", f"{column_name}: {row.data[column_name]}"
        )
        return row
