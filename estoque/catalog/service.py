import uuid
from datetime import date
from typing import Any, Dict, List, Optional, Union

from sqlmodel import Session, func, select

from estoque.base import CRUDBase
from estoque.catalog.filters import ALL_CATEGORIES, categories, filter_products, low_stock
from estoque.catalog.models import ProductRecord
from estoque.catalog.schemas import ProductCreate, ProductPublic, ProductUpdate
from estoque.errors import ValidationError


def product_to_public(product: ProductRecord) -> ProductPublic:
    public = ProductPublic.model_validate(product)
    public.low_stock = product.quantity <= product.min_stock
    return public


def _require_name_and_category(name: Optional[str], category: Optional[str]) -> None:
    if not (name or "").strip() or not (category or "").strip():
        raise ValidationError("Nome e categoria são obrigatórios")


class CRUDProduct(CRUDBase[ProductRecord, ProductCreate, ProductUpdate]):
    def get_by_setor(self, session: Session, setor_id: uuid.UUID) -> List[ProductRecord]:
        statement = (
            select(self.model)
            .where(self.model.setor_id == setor_id)
            .order_by(self.model.name)
        )
        return list(session.exec(statement).all())

    def get_for_setor(
        self, session: Session, *, id: uuid.UUID, setor_id: uuid.UUID
    ) -> Optional[ProductRecord]:
        db_obj = session.get(self.model, id)
        if not db_obj or db_obj.setor_id != setor_id:
            return None
        return db_obj

    def search(
        self,
        session: Session,
        *,
        setor_id: uuid.UUID,
        search: str = "",
        category: str = ALL_CATEGORIES,
    ) -> List[ProductRecord]:
        return filter_products(self.get_by_setor(session, setor_id), search, category)

    def categories(self, session: Session, *, setor_id: uuid.UUID) -> List[str]:
        return categories(self.get_by_setor(session, setor_id))

    def low_stock(self, session: Session, *, setor_id: uuid.UUID) -> List[ProductRecord]:
        return low_stock(self.get_by_setor(session, setor_id))

    def count_by_setor(self, session: Session, *, setor_id: uuid.UUID) -> int:
        statement = select(func.count()).select_from(self.model).where(self.model.setor_id == setor_id)
        return session.exec(statement).one()

    def create_for_setor(
        self, session: Session, *, obj_in: ProductCreate, setor_id: uuid.UUID
    ) -> ProductRecord:
        _require_name_and_category(obj_in.name, obj_in.category)
        return self.create(
            session=session,
            obj_in=obj_in,
            setor_id=setor_id,
            name=obj_in.name.strip(),
            category=obj_in.category.strip(),
            last_updated=date.today(),
        )

    def update(
        self,
        session: Session,
        *,
        db_obj: ProductRecord,
        obj_in: Union[ProductUpdate, Dict[str, Any]],
    ) -> ProductRecord:
        if isinstance(obj_in, dict):
            update_data = dict(obj_in)
        else:
            update_data = obj_in.model_dump(exclude_unset=True)

        _require_name_and_category(
            update_data.get("name", db_obj.name), update_data.get("category", db_obj.category)
        )
        if update_data.get("quantity") is not None:
            update_data["quantity"] = max(0, update_data["quantity"])
        else:
            update_data.pop("quantity", None)
        update_data["last_updated"] = date.today()
        return super().update(session=session, db_obj=db_obj, obj_in=update_data)

    def adjust_quantity(
        self, session: Session, *, db_obj: ProductRecord, delta: int
    ) -> ProductRecord:
        return self.update(
            session=session, db_obj=db_obj, obj_in={"quantity": max(0, db_obj.quantity + delta)}
        )


product = CRUDProduct(ProductRecord)
