import uuid
from typing import Any, List

from fastapi import APIRouter, HTTPException

from estoque.auth.dependencies import CurrentContext, SessionDep
from estoque.datatables.models import DataTable, DataTableRow
from estoque.datatables.schemas import (
    DataTableCreate,
    DataTableResponse,
    DataTableRowResponse,
    DataTableRowWrite,
    DeleteResult,
    QuantityAdjust,
    RowResult,
    TableResult,
)
from estoque.datatables.service import data_table, data_table_row
from estoque.notifications import Notifier, reported

router = APIRouter()


def table_response(session: SessionDep, table: DataTable) -> DataTableResponse:
    response = DataTableResponse.model_validate(table)
    response.row_count = data_table_row.count_by_table(session=session, table_id=table.id)
    return response


def get_table_or_404(session: SessionDep, context: CurrentContext, table_id: uuid.UUID) -> DataTable:
    db_table = data_table.get_for_setor(session=session, id=table_id, setor_id=context.setor_id)
    if not db_table:
        raise HTTPException(status_code=404, detail="Table not found")
    return db_table


def get_row_or_404(session: SessionDep, table_id: uuid.UUID, row_id: uuid.UUID) -> DataTableRow:
    db_obj = data_table_row.get_in_table(session=session, id=row_id, table_id=table_id)
    if not db_obj:
        raise HTTPException(status_code=404, detail="Row not found")
    return db_obj


@router.get("/", response_model=List[DataTableResponse])
def get_tables(session: SessionDep, context: CurrentContext) -> Any:
    """Retrieve all tables of the caller's sector, with row counts."""
    tables = data_table.get_by_setor(session=session, setor_id=context.setor_id)
    return [table_response(session, table) for table in tables]


@router.post("/", response_model=TableResult)
def create_table(session: SessionDep, context: CurrentContext, obj_in: DataTableCreate) -> Any:
    """Create a new custom table. Needs a name and at least one named column."""
    notifier = Notifier()
    with reported(notifier, session):
        db_obj = data_table.create_for_setor(
            session=session, obj_in=obj_in, setor_id=context.setor_id, owner_id=context.user_id
        )
    return TableResult(
        notification=notifier.success("Sucesso", "Tabela criada com sucesso!"),
        data=table_response(session, db_obj),
    )


@router.get("/{table_id}", response_model=DataTableResponse)
def get_table(session: SessionDep, context: CurrentContext, table_id: uuid.UUID) -> Any:
    """Get a specific table by ID."""
    return table_response(session, get_table_or_404(session, context, table_id))


@router.delete("/{table_id}", response_model=DeleteResult)
def delete_table(session: SessionDep, context: CurrentContext, table_id: uuid.UUID) -> Any:
    """Delete a table and its rows."""
    get_table_or_404(session, context, table_id)
    notifier = Notifier()
    with reported(notifier, session):
        data_table.remove(session=session, id=table_id)
    return DeleteResult(
        notification=notifier.success("Tabela removida", "A tabela foi removida com sucesso")
    )


# --- Row Operations ---

@router.get("/{table_id}/rows", response_model=List[DataTableRowResponse])
def get_table_rows(session: SessionDep, context: CurrentContext, table_id: uuid.UUID) -> Any:
    """Retrieve all rows for a specific table."""
    get_table_or_404(session, context, table_id)
    return data_table_row.get_by_table_id(session=session, table_id=table_id)


@router.post("/{table_id}/rows", response_model=RowResult)
def create_table_row(
    session: SessionDep, context: CurrentContext, table_id: uuid.UUID, obj_in: DataTableRowWrite
) -> Any:
    """Create a new row. Every required column needs a value."""
    db_table = get_table_or_404(session, context, table_id)
    notifier = Notifier()
    with reported(notifier, session):
        db_obj = data_table_row.create_in_table(session=session, table=db_table, obj_in=obj_in)
    return RowResult(
        notification=notifier.success("Sucesso", "Item adicionado com sucesso!"),
        data=DataTableRowResponse.model_validate(db_obj),
    )


@router.put("/{table_id}/rows/{row_id}", response_model=RowResult)
def update_table_row(
    session: SessionDep,
    context: CurrentContext,
    table_id: uuid.UUID,
    row_id: uuid.UUID,
    obj_in: DataTableRowWrite,
) -> Any:
    """Replace the data of a row."""
    db_table = get_table_or_404(session, context, table_id)
    db_obj = get_row_or_404(session, table_id, row_id)
    notifier = Notifier()
    with reported(notifier, session):
        db_obj = data_table_row.update_in_table(
            session=session, table=db_table, db_obj=db_obj, obj_in=obj_in
        )
    return RowResult(
        notification=notifier.success("Sucesso", "Item atualizado com sucesso!"),
        data=DataTableRowResponse.model_validate(db_obj),
    )


@router.post("/{table_id}/rows/{row_id}/quantity", response_model=RowResult)
def adjust_row_quantity(
    session: SessionDep,
    context: CurrentContext,
    table_id: uuid.UUID,
    row_id: uuid.UUID,
    obj_in: QuantityAdjust,
) -> Any:
    """Add ``delta`` to a numeric column. The result never drops below zero."""
    get_table_or_404(session, context, table_id)
    db_obj = get_row_or_404(session, table_id, row_id)
    notifier = Notifier()
    with reported(notifier, session):
        db_obj = data_table_row.adjust_quantity(
            session=session, db_obj=db_obj, column=obj_in.column, delta=obj_in.delta
        )
    return RowResult(
        notification=notifier.success(
            "Quantidade atualizada", f"{obj_in.column}: {db_obj.data[obj_in.column]}"
        ),
        data=DataTableRowResponse.model_validate(db_obj),
    )


@router.delete("/{table_id}/rows/{row_id}", response_model=DeleteResult)
def delete_table_row(
    session: SessionDep, context: CurrentContext, table_id: uuid.UUID, row_id: uuid.UUID
) -> Any:
    """Delete a row in a table."""
    get_table_or_404(session, context, table_id)
    get_row_or_404(session, table_id, row_id)
    notifier = Notifier()
    with reported(notifier, session):
        data_table_row.remove(session=session, id=row_id)
    return DeleteResult(
        notification=notifier.success("Item removido", "O item foi removido com sucesso")
    )
