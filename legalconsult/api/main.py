"""FastAPI application factory.

Assembles the API routers and maps application errors to responses.
This module is the authoritative app object; legalconsult/main.py re-exports it.
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from legalconsult.api.deps import get_translator
from legalconsult.api.routes.comments import router as comments_router
from legalconsult.api.routes.documents import router as documents_router
from legalconsult.api.routes.health import router as health_router
from legalconsult.api.routes.users import router as users_router
from legalconsult.core.exceptions import LegalValidationError, NotFoundError
from legalconsult.core.logging import setup_logging
from legalconsult.core.settings import get_settings

logger = logging.getLogger(__name__)

# entity name -> message key
_NOT_FOUND_KEYS: dict[str, str] = {
    "DocumentConsolidated": "document.Consolidated.notFound",
    "DocumentNode": "documentNode.NotFound",
    "User": "user.NotFound",
    "Comment": "comment.NotFound",
}


@asynccontextmanager
async def lifespan(_: FastAPI):
    setup_logging()
    yield


async def legal_validation_handler(_: Request, exc: LegalValidationError) -> JSONResponse:
    translator = get_translator()
    args = exc.i18n_args
    detail = translator.translate(exc.i18n_key, ", ".join(args)) if args else translator.translate(exc.i18n_key)
    return JSONResponse(
        status_code=exc.status_code,
        content={"code": exc.i18n_key, "detail": detail, "args": args},
    )


async def not_found_handler(_: Request, exc: NotFoundError) -> JSONResponse:
    key = _NOT_FOUND_KEYS.get(exc.entity, "entity.NotFound")
    logger.info("%s %s not found", exc.entity, exc.identifier)
    return JSONResponse(
        status_code=404,
        content={"code": key, "detail": get_translator().translate(key), "args": [str(exc.identifier)]},
    )


settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(LegalValidationError, legal_validation_handler)
app.add_exception_handler(NotFoundError, not_found_handler)

app.include_router(health_router)
app.include_router(documents_router)
app.include_router(users_router)
app.include_router(comments_router)
