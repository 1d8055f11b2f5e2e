import logging
import uuid
from typing import List, Optional

from sqlmodel import Session, select

from estoque.auth.crud_user import user as user_crud
from estoque.base import CRUDBase
from estoque.datatables.service import data_table, data_table_row
from estoque.errors import ValidationError
from estoque.setores.models import Setor
from estoque.setores.schemas import SetorCreate, SetorStats, SetorUpdate
from estoque.utils.dates import utcnow

logger = logging.getLogger(__name__)


class CRUDSetor(CRUDBase[Setor, SetorCreate, SetorUpdate]):
    def get_all(self, session: Session) -> List[Setor]:
        statement = select(Setor).order_by(Setor.nome)
        return list(session.exec(statement).all())

    def get_by_nome(self, session: Session, *, nome: str) -> Optional[Setor]:
        return session.exec(select(Setor).where(Setor.nome == nome)).first()

    def rename(self, session: Session, *, db_obj: Setor, obj_in: SetorUpdate) -> Setor:
        nome = (obj_in.nome or "").strip()
        if not nome:
            raise ValidationError("O nome do setor é obrigatório")
        updated = self.update(
            session=session,
            db_obj=db_obj,
            obj_in={
                "nome": nome,
                "descricao": (obj_in.descricao or "").strip(),
                "updated_at": utcnow(),
            },
        )
        logger.info(f"Setor {updated.id} renamed to '{nome}'")
        return updated

    def stats(self, session: Session, *, setor_id: uuid.UUID) -> SetorStats:
        return SetorStats(
            tables=data_table.count_by_setor(session=session, setor_id=setor_id),
            products=data_table_row.count_by_setor(session=session, setor_id=setor_id),
            users=user_crud.count_by_setor(session=session, setor_id=setor_id),
        )


setor = CRUDSetor(Setor)
