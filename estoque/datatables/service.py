import logging
import uuid
from typing import Any, Dict, List, Mapping, Optional

from sqlmodel import Session, func, select

from estoque.base import CRUDBase
from estoque.datatables.columns import Column, duplicate_names, valid_columns
from estoque.datatables.forms import FormBinder
from estoque.datatables.models import DataTable, DataTableRow
from estoque.datatables.rows import clamp_quantity
from estoque.datatables.schemas import DataTableCreate, DataTableRowWrite
from estoque.errors import ValidationError
from estoque.utils.dates import utcnow

logger = logging.getLogger(__name__)


def table_columns(table: DataTable) -> List[Column]:
    return [Column.model_validate(column) for column in table.columns]


class CRUDDataTable(CRUDBase[DataTable, DataTableCreate, DataTableCreate]):
    def get_by_setor(self, session: Session, setor_id: uuid.UUID) -> List[DataTable]:
        statement = (
            select(self.model)
            .where(self.model.setor_id == setor_id)
            .order_by(self.model.created_at)
        )
        return list(session.exec(statement).all())

    def get_for_setor(
        self, session: Session, *, id: uuid.UUID, setor_id: uuid.UUID
    ) -> Optional[DataTable]:
        db_obj = session.get(self.model, id)
        if not db_obj or db_obj.setor_id != setor_id:
            return None
        return db_obj

    def count_by_setor(self, session: Session, *, setor_id: uuid.UUID) -> int:
        statement = select(func.count()).select_from(self.model).where(self.model.setor_id == setor_id)
        return session.exec(statement).one()

    def create_for_setor(
        self,
        session: Session,
        *,
        obj_in: DataTableCreate,
        setor_id: uuid.UUID,
        owner_id: Optional[uuid.UUID] = None,
    ) -> DataTable:
        name = (obj_in.name or "").strip()
        if not name:
            raise ValidationError("Nome da tabela é obrigatório")

        columns = valid_columns(obj_in.columns)
        if not columns:
            raise ValidationError("Pelo menos uma coluna deve ser definida")

        duplicates = duplicate_names(columns)
        if duplicates:
            logger.warning(f"Table '{name}' repeats column names: {duplicates}")

        db_obj = self.model(
            name=name,
            description=obj_in.description or "",
            columns=[column.model_dump(mode="json") for column in columns],
            setor_id=setor_id,
            owner_id=owner_id,
        )
        session.add(db_obj)
        session.commit()
        session.refresh(db_obj)
        logger.info(f"Created table '{db_obj.name}' ({db_obj.id}) in setor {setor_id}")
        return db_obj


class CRUDDataTableRow(CRUDBase[DataTableRow, DataTableRowWrite, DataTableRowWrite]):
    def get_by_table_id(self, session: Session, table_id: uuid.UUID) -> List[DataTableRow]:
        statement = (
            select(self.model)
            .where(self.model.table_id == table_id)
            .order_by(self.model.created_at)
        )
        return list(session.exec(statement).all())

    def get_in_table(
        self, session: Session, *, id: uuid.UUID, table_id: uuid.UUID
    ) -> Optional[DataTableRow]:
        db_obj = session.get(self.model, id)
        if not db_obj or db_obj.table_id != table_id:
            return None
        return db_obj

    def count_by_table(self, session: Session, *, table_id: uuid.UUID) -> int:
        statement = select(func.count()).select_from(self.model).where(self.model.table_id == table_id)
        return session.exec(statement).one()

    def count_by_setor(self, session: Session, *, setor_id: uuid.UUID) -> int:
        statement = select(func.count()).select_from(self.model).where(self.model.setor_id == setor_id)
        return session.exec(statement).one()

    def _validated(
        self, table: DataTable, values: Mapping[str, Any], current: Optional[Mapping[str, Any]] = None
    ) -> Dict[str, Any]:
        binder = FormBinder(table_columns(table), current)
        binder.update(values)
        return binder.validate()

    def create_in_table(
        self, session: Session, *, table: DataTable, obj_in: DataTableRowWrite
    ) -> DataTableRow:
        data = self._validated(table, obj_in.data)
        db_obj = self.model(table_id=table.id, setor_id=table.setor_id, data=data)
        session.add(db_obj)
        session.commit()
        session.refresh(db_obj)
        return db_obj

    def update_in_table(
        self, session: Session, *, table: DataTable, db_obj: DataTableRow, obj_in: DataTableRowWrite
    ) -> DataTableRow:
        data = self._validated(table, obj_in.data, db_obj.data)
        return self.update(
            session=session,
            db_obj=db_obj,
            obj_in={"data": data, "updated_at": utcnow()},
        )

    def adjust_quantity(
        self, session: Session, *, db_obj: DataTableRow, column: str, delta: float
    ) -> DataTableRow:
        data = dict(db_obj.data)
        data[column] = clamp_quantity(data.get(column), delta)
        return self.update(
            session=session,
            db_obj=db_obj,
            obj_in={"data": data, "updated_at": utcnow()},
        )


data_table = CRUDDataTable(DataTable)
data_table_row = CRUDDataTableRow(DataTableRow)
