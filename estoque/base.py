import uuid
from typing import Any, Dict, Generic, Optional, Type, TypeVar, Union

from pydantic import BaseModel
from sqlmodel import Session, SQLModel

ModelType = TypeVar("ModelType", bound=SQLModel)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=BaseModel)


class CRUDBase(Generic[ModelType, CreateSchemaType, UpdateSchemaType]):
    def __init__(self, model: Type[ModelType]):
        """
        CRUD object with default methods to Create, Read, Update, Delete.

        **Parameters**

        * `model`: A SQLModel model class
        """
        self.model = model

    def get(self, session: Session, id: uuid.UUID) -> Optional[ModelType]:
        return session.get(self.model, id)

    def create(self, session: Session, *, obj_in: CreateSchemaType, **extra: Any) -> ModelType:
        db_obj = self.model.model_validate(obj_in.model_dump(), update=extra)
        session.add(db_obj)
        session.commit()
        session.refresh(db_obj)
        return db_obj

    def update(
        self,
        session: Session,
        *,
        db_obj: ModelType,
        obj_in: Union[UpdateSchemaType, Dict[str, Any]],
    ) -> ModelType:
        if isinstance(obj_in, dict):
            update_data = obj_in
        else:
            update_data = obj_in.model_dump(exclude_unset=True)
        db_obj.sqlmodel_update(update_data)
        session.add(db_obj)
        session.commit()
        session.refresh(db_obj)
        return db_obj

    def remove(self, session: Session, *, id: uuid.UUID) -> Optional[ModelType]:
        db_obj = session.get(self.model, id)
        if db_obj is None:
            return None
        session.delete(db_obj)
        session.commit()
        return db_obj
