import uuid
from typing import Any, Dict, Optional, Union

from sqlmodel import Session, func, select

from estoque.auth.models import User
from estoque.auth.schemas import UserCreate, UserUpdate
from estoque.auth.utils import get_password_hash, verify_password
from estoque.base import CRUDBase


class CRUDUser(CRUDBase[User, UserCreate, UserUpdate]):
    def get_by_email(self, session: Session, *, email: str) -> Optional[User]:
        statement = select(User).where(User.email == email)
        return session.exec(statement).first()

    def create(self, session: Session, *, obj_in: UserCreate, **extra: Any) -> User:
        create_data = obj_in.model_dump(exclude={"password"})
        create_data.update(extra)
        db_obj = User.model_validate(create_data)
        if obj_in.password:
            db_obj.hashed_password = get_password_hash(obj_in.password)
        session.add(db_obj)
        session.commit()
        session.refresh(db_obj)
        return db_obj

    def update(
        self, session: Session, *, db_obj: User, obj_in: Union[UserUpdate, Dict[str, Any]]
    ) -> User:
        if isinstance(obj_in, dict):
            update_data = dict(obj_in)
        else:
            update_data = obj_in.model_dump(exclude_unset=True)

        if "password" in update_data:
            password = update_data.pop("password")
            if password:
                update_data["hashed_password"] = get_password_hash(password)

        return super().update(session=session, db_obj=db_obj, obj_in=update_data)

    def authenticate(
        self, session: Session, *, email: str, password: str
    ) -> Optional[User]:
        user = self.get_by_email(session=session, email=email)
        if not user:
            return None
        if not verify_password(password, user.hashed_password):
            return None
        return user

    def count_by_setor(self, session: Session, *, setor_id: uuid.UUID) -> int:
        statement = select(func.count()).select_from(User).where(User.setor_id == setor_id)
        return session.exec(statement).one()


user = CRUDUser(User)
