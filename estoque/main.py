import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.routing import APIRoute
from sqlmodel import Session
from starlette.middleware.cors import CORSMiddleware

from estoque.api import api_router
from estoque.config import settings
from estoque.database import create_db_and_tables, engine, init_db
from estoque.logger import setup_global_logger
from estoque.utils.health import router as health_router
from estoque.utils.request_id import RequestIDMiddleware

setup_global_logger(settings.LOG_LEVEL)

logger = logging.getLogger(__name__)


def custom_generate_unique_id(route: APIRoute) -> str:
    if route.tags:
        return f"{route.tags[0]}-{route.name}"
    return route.name


@asynccontextmanager
async def lifespan(app: FastAPI):
    create_db_and_tables()
    with Session(engine) as session:
        init_db(session)
    logger.info(f"{settings.PROJECT_NAME} ready on {settings.SQLALCHEMY_DATABASE_URI.split('://')[0]}")
    yield


app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    generate_unique_id_function=custom_generate_unique_id,
    lifespan=lifespan,
)


# Log validation errors for debugging
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    logger.error(f"Validation error for {request.url}: {errors}")
    return JSONResponse(status_code=422, content={"detail": jsonable_encoder(errors)})


cors_origins = [str(origin).strip("/") for origin in settings.BACKEND_CORS_ORIGINS]
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins if cors_origins else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(RequestIDMiddleware)

app.include_router(health_router)
app.include_router(api_router, prefix=settings.API_V1_STR)
