from fastapi import APIRouter

from estoque.auth.router import router as auth_router
from estoque.catalog.router import router as products_router
from estoque.datatables.router import router as tables_router
from estoque.setores.router import router as setores_router

api_router = APIRouter()
api_router.include_router(auth_router, tags=["auth"])
api_router.include_router(setores_router, prefix="/setores", tags=["setores"])
api_router.include_router(tables_router, prefix="/tables", tags=["tables"])
api_router.include_router(products_router, prefix="/products", tags=["products"])
