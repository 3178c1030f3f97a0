import logging
import logging.config
from typing import Callable

from aiobotocore.session import get_session
from fastapi import APIRouter, FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from cobalt.constants import (
    CORS_ORIGINS,
    DATABASE_AUTO_CREATE,
    DATABASE_ECHO,
    DATABASE_URL,
    DEBUG,
    S3_ACCESS_KEY,
    S3_SECRET_KEY,
    S3_URL,
    SEED_DEFAULTS,
    LogConfig
)
from cobalt.models import Base
from cobalt.routes import routers
from cobalt.utils.db import seed_defaults
from cobalt.utils.templater import Templater

logging.config.dictConfig(LogConfig().model_dump())
log = logging.getLogger("cobalt")

app = FastAPI(
    title="cobalt",
    docs_url="/api/v1/docs",
    redoc_url="/api/v1/redoc",
    openapi_url="/api/v1/openapi.json",
)
app_router = APIRouter(prefix="/api/v1")

if DEBUG:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
        allow_credentials=True,
    )

for router in routers:
    app_router.include_router(router)

app.include_router(app_router)


@app.on_event("startup")
async def start() -> None:
    """Sets up the database connection, S3 client, and templater."""
    app.state.engine = create_async_engine(DATABASE_URL, echo=DATABASE_ECHO)
    app.state.async_session = sessionmaker(
        app.state.engine,
        expire_on_commit=False,
        class_=AsyncSession,
    )

    if DATABASE_AUTO_CREATE:
        async with app.state.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        log.info("Database tables created")

    if SEED_DEFAULTS:
        async with app.state.async_session() as session:
            await seed_defaults(session)

    app.state.templater = Templater()

    boto_session = get_session()

    def s3():
        return boto_session.create_client(
            "s3",
            endpoint_url=S3_URL,
            aws_access_key_id=S3_ACCESS_KEY,
            aws_secret_access_key=S3_SECRET_KEY,
        )

    app.state.s3 = s3


@app.on_event("shutdown")
async def shutdown() -> None:
    """Closes the database connections."""
    await app.state.engine.dispose()


@app.middleware("http")
async def setup_request(request: Request, callnext: Callable) -> Response:
    """Gets the database connection, S3 client, and templater for each request."""
    request.state.s3 = app.state.s3
    request.state.templater = app.state.templater

    async with app.state.async_session() as session:
        request.state.db = session
        response = await callnext(request)

    request.state.db = None
    return response
