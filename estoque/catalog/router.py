import uuid
from typing import Any, List

from fastapi import APIRouter, HTTPException

from estoque.auth.dependencies import CurrentContext, SessionDep
from estoque.catalog.filters import ALL_CATEGORIES
from estoque.catalog.models import ProductRecord
from estoque.catalog.schemas import (
    ProductCreate,
    ProductPublic,
    ProductResult,
    ProductsPublic,
    ProductUpdate,
    QuantityChange,
    StockOverview,
)
from estoque.catalog.service import product, product_to_public
from estoque.notifications import Notifier, reported

router = APIRouter()


def get_product_or_404(session: SessionDep, context: CurrentContext, id: uuid.UUID) -> ProductRecord:
    db_obj = product.get_for_setor(session=session, id=id, setor_id=context.setor_id)
    if not db_obj:
        raise HTTPException(status_code=404, detail="Product not found")
    return db_obj


@router.get("/", response_model=ProductsPublic)
def read_products(
    session: SessionDep,
    context: CurrentContext,
    search: str = "",
    category: str = ALL_CATEGORIES,
) -> Any:
    """
    Retrieve the sector's products matching ``search`` (name or location)
    and ``category`` (``all`` for every category).
    """
    products = product.search(
        session=session, setor_id=context.setor_id, search=search, category=category
    )
    return ProductsPublic(data=[product_to_public(p) for p in products], count=len(products))


@router.get("/categories", response_model=List[str])
def read_categories(session: SessionDep, context: CurrentContext) -> Any:
    return product.categories(session=session, setor_id=context.setor_id)


@router.get("/low-stock", response_model=List[ProductPublic])
def read_low_stock(session: SessionDep, context: CurrentContext) -> Any:
    """Products whose quantity is at or below their minimum stock."""
    return [product_to_public(p) for p in product.low_stock(session=session, setor_id=context.setor_id)]


@router.get("/overview", response_model=StockOverview)
def read_overview(session: SessionDep, context: CurrentContext) -> Any:
    low = product.low_stock(session=session, setor_id=context.setor_id)
    return StockOverview(
        products=product.count_by_setor(session=session, setor_id=context.setor_id),
        low_stock=len(low),
        low_stock_items=[product_to_public(p) for p in low],
    )


@router.post("/", response_model=ProductResult)
def create_product(session: SessionDep, context: CurrentContext, obj_in: ProductCreate) -> Any:
    notifier = Notifier()
    with reported(notifier, session):
        db_obj = product.create_for_setor(session=session, obj_in=obj_in, setor_id=context.setor_id)
    return ProductResult(
        notification=notifier.success("Sucesso", "Produto adicionado com sucesso!"),
        data=product_to_public(db_obj),
    )


@router.get("/{id}", response_model=ProductPublic)
def read_product(session: SessionDep, context: CurrentContext, id: uuid.UUID) -> Any:
    return product_to_public(get_product_or_404(session, context, id))


@router.patch("/{id}", response_model=ProductResult)
def update_product(
    session: SessionDep, context: CurrentContext, id: uuid.UUID, obj_in: ProductUpdate
) -> Any:
    """Update a product. ``last_updated`` is set to today."""
    db_obj = get_product_or_404(session, context, id)
    notifier = Notifier()
    with reported(notifier, session):
        db_obj = product.update(session=session, db_obj=db_obj, obj_in=obj_in)
    return ProductResult(
        notification=notifier.success("Sucesso", "Produto atualizado com sucesso!"),
        data=product_to_public(db_obj),
    )


@router.post("/{id}/quantity", response_model=ProductResult)
def adjust_product_quantity(
    session: SessionDep, context: CurrentContext, id: uuid.UUID, obj_in: QuantityChange
) -> Any:
    """Add ``delta`` to the quantity, never going below zero."""
    db_obj = get_product_or_404(session, context, id)
    notifier = Notifier()
    with reported(notifier, session):
        db_obj = product.adjust_quantity(session=session, db_obj=db_obj, delta=obj_in.delta)
    return ProductResult(
        notification=notifier.success("Quantidade atualizada", f"{db_obj.name}: {db_obj.quantity}"),
        data=product_to_public(db_obj),
    )


@router.delete("/{id}", response_model=ProductResult)
def delete_product(session: SessionDep, context: CurrentContext, id: uuid.UUID) -> Any:
    get_product_or_404(session, context, id)
    notifier = Notifier()
    with reported(notifier, session):
        product.remove(session=session, id=id)
    return ProductResult(
        notification=notifier.success("Produto removido", "O produto foi removido com sucesso")
    )
