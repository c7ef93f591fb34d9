# app/main.py

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app import __version__
from app.api.badges import router as badges_router
from app.api.health import router as health_router
from app.api.levels import router as levels_router
from app.api.user_badges import router as user_badges_router
from app.api.user_levels import router as user_levels_router
from app.config import settings
from app.core.errors import AppError, RequestValidationFailed
from app.core.validation import violations_from_errors
from app.db.base import engine
from app.graphql.schema import graphql_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
log = logging.getLogger(__name__)

tags_metadata = [
    {"name": "Levels", "description": "Level catalogue. Writes are admin only."},
    {"name": "Badges", "description": "Badge catalogue. Writes are admin only."},
    {"name": "User badges", "description": "Badges awarded to users. Writes are admin only."},
    {"name": "User levels", "description": "Per-user level progress. Writes need a token."},
    {"name": "Health", "description": "Liveness and database check."},
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    log.info("\U0001F680 SimAid API starting. Environment: %s", settings.ENVIRONMENT)
    yield
    await engine.dispose()
    log.info("\U0001F44B SimAid API shutdown, database engine disposed.")


app = FastAPI(
    title="SimAid API",
    description="Badges, user badges and user level progress.",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=tags_metadata,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(levels_router, prefix="/api")
app.include_router(badges_router, prefix="/api")
app.include_router(user_badges_router, prefix="/api")
app.include_router(user_levels_router, prefix="/api")
app.include_router(health_router)
app.include_router(graphql_router, prefix="/graphql")


# --- Error translation ---

@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if isinstance(exc, RequestValidationFailed):
        log.info("%s %s rejected: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content=jsonable_encoder(exc.to_dict()),
        headers=exc.headers,
    )


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # Unmatched routes and wrong methods raised by the router itself
    message = "Route not found" if exc.status_code == status.HTTP_404_NOT_FOUND else str(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": message},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    violations = violations_from_errors(exc.errors())
    log.info("%s %s rejected: %s", request.method, request.url.path, [v.field for v in violations])
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=jsonable_encoder({"errors": [v.to_dict() for v in violations]}),
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    log.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Internal Server Error", "error": str(exc)},
    )
