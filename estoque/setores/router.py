import uuid
from typing import Any

from fastapi import APIRouter, HTTPException

from estoque.auth.dependencies import CurrentContext, SessionDep
from estoque.notifications import Notifier, reported
from estoque.setores.schemas import (
    SetoresPublic,
    SetorPublic,
    SetorResult,
    SetorStats,
    SetorUpdate,
)
from estoque.setores.service import setor

router = APIRouter()


@router.get("/", response_model=SetoresPublic)
def read_setores(session: SessionDep) -> Any:
    """
    List every sector ordered by name. Public, the sign-up form needs it.
    """
    setores = setor.get_all(session)
    return SetoresPublic(data=setores, count=len(setores))


@router.get("/me", response_model=SetorPublic)
def read_my_setor(session: SessionDep, context: CurrentContext) -> Any:
    db_obj = setor.get(session=session, id=context.setor_id)
    if not db_obj:
        raise HTTPException(status_code=404, detail="Setor not found")
    return db_obj


@router.get("/me/stats", response_model=SetorStats)
def read_my_setor_stats(session: SessionDep, context: CurrentContext) -> Any:
    """Counts of tables, table rows and users of the caller's sector."""
    return setor.stats(session=session, setor_id=context.setor_id)


@router.put("/me", response_model=SetorResult)
def update_my_setor(session: SessionDep, context: CurrentContext, obj_in: SetorUpdate) -> Any:
    db_obj = setor.get(session=session, id=context.setor_id)
    if not db_obj:
        raise HTTPException(status_code=404, detail="Setor not found")
    notifier = Notifier()
    with reported(notifier, session):
        db_obj = setor.rename(session=session, db_obj=db_obj, obj_in=obj_in)
    return SetorResult(
        notification=notifier.success(
            "Setor atualizado!", "As configurações do setor foram salvas com sucesso."
        ),
        data=SetorPublic.model_validate(db_obj),
    )


@router.get("/{setor_id}", response_model=SetorPublic)
def read_setor(session: SessionDep, setor_id: uuid.UUID) -> Any:
    db_obj = setor.get(session=session, id=setor_id)
    if not db_obj:
        raise HTTPException(status_code=404, detail="Setor not found")
    return db_obj
