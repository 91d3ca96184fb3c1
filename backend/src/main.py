import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

import auth.infrastructure.orm_models  # noqa: F401
import documents.infrastructure.models  # noqa: F401
from auth.interfaces.routes import router as auth_router
from documents.interfaces.routes import router as documents_router
from documents.interfaces.version_routes import router as versions_router
from shared.config import settings
from shared.exceptions import (
    AppError,
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    InvalidMutationError,
    NotFoundError,
    SequencingConflictError,
)
from shared.infrastructure.database import create_all, engine
from shared.logging_config import configure_logging

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.AUTO_CREATE_TABLES:
        await create_all()
        logger.info("Database tables ensured")
    yield
    await engine.dispose()


app = FastAPI(
    title="Document History Service",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router)
app.include_router(documents_router)
app.include_router(versions_router)


@app.exception_handler(NotFoundError)
async def not_found_handler(request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"detail": exc.message})


@app.exception_handler(SequencingConflictError)
async def sequencing_conflict_handler(request, exc: SequencingConflictError):
    logger.warning("Rejected mutation on %s: %s", request.url.path, exc.message)
    return JSONResponse(status_code=409, content={"detail": exc.message})


@app.exception_handler(ConflictError)
async def conflict_handler(request, exc: ConflictError):
    return JSONResponse(status_code=409, content={"detail": exc.message})


@app.exception_handler(InvalidMutationError)
async def invalid_mutation_handler(request, exc: InvalidMutationError):
    return JSONResponse(status_code=422, content={"detail": exc.message})


@app.exception_handler(AuthenticationError)
async def auth_error_handler(request, exc: AuthenticationError):
    return JSONResponse(status_code=401, content={"detail": exc.message})


@app.exception_handler(AuthorizationError)
async def forbidden_handler(request, exc: AuthorizationError):
    return JSONResponse(status_code=403, content={"detail": exc.message})


@app.exception_handler(AppError)
async def app_error_handler(request, exc: AppError):
    logger.error("Unhandled application error: %s", exc.message)
    return JSONResponse(status_code=500, content={"detail": exc.message})


@app.get("/health")
async def health_check():
    return {"status": "ok"}
