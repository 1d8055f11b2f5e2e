import logging

from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine

from estoque.config import settings

logger = logging.getLogger(__name__)

connect_args = (
    {"check_same_thread": False}
    if settings.SQLALCHEMY_DATABASE_URI.startswith("sqlite")
    else {}
)
engine = create_engine(str(settings.SQLALCHEMY_DATABASE_URI), connect_args=connect_args)


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores ON DELETE CASCADE unless asked
    if type(dbapi_connection).__module__.startswith("sqlite3"):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def create_db_and_tables(bind: Engine = engine) -> None:
    # make sure all SQLModel models are imported before creating tables
    from estoque import models  # noqa: F401

    SQLModel.metadata.create_all(bind)


def init_db(session: Session) -> None:
    """Create the default sectors and the first superuser when missing."""
    from estoque.auth.crud_user import user as user_crud
    from estoque.auth.schemas import Role, UserCreate
    from estoque.setores.schemas import SetorCreate
    from estoque.setores.service import setor as setor_crud

    setores = []
    for nome in settings.DEFAULT_SETORES:
        db_setor = setor_crud.get_by_nome(session=session, nome=nome)
        if not db_setor:
            db_setor = setor_crud.create(session=session, obj_in=SetorCreate(nome=nome))
            logger.info(f"Created setor '{nome}'")
        setores.append(db_setor)

    home = setores[0] if setores else None

    admin = user_crud.get_by_email(session=session, email=settings.FIRST_SUPERUSER)
    if not admin:
        admin = user_crud.create(
            session=session,
            obj_in=UserCreate(
                email=settings.FIRST_SUPERUSER,
                password=settings.FIRST_SUPERUSER_PASSWORD,
                full_name="Administrador",
                role=Role.ADMIN,
                setor_id=home.id if home else None,
            ),
        )
        logger.info(f"Created superuser {admin.email}")

        if settings.SEED_SAMPLE_DATA and home is not None:
            seed_sample_data(session, setor_id=home.id, owner_id=admin.id)


def seed_sample_data(session: Session, *, setor_id, owner_id=None) -> None:
    """Copy the demo tables and their rows into a sector."""
    from estoque.datatables.fixtures import sample_rows, sample_tables
    from estoque.datatables.models import DataTable, DataTableRow

    rows_by_table = sample_rows()
    for table in sample_tables():
        db_table = DataTable(
            name=table.name,
            description=table.description,
            columns=[column.model_dump(mode="json") for column in table.columns],
            setor_id=setor_id,
            owner_id=owner_id,
        )
        session.add(db_table)
        session.flush()
        for row in rows_by_table.get(table.id, []):
            session.add(DataTableRow(table_id=db_table.id, setor_id=setor_id, data=row.data))
    session.commit()
    logger.info(f"Seeded sample tables into setor {setor_id}")
