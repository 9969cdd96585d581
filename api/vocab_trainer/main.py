from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.concurrency import run_in_threadpool
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import logging
import traceback
from vocab_trainer.core.config import settings
from vocab_trainer.core.database import init_db
from vocab_trainer.core.exceptions import VocabTrainerException
from vocab_trainer.services.repository import open_repository
from vocab_trainer.services.seed_service import seed_default_data
from vocab_trainer.utils.time_utils import now_ms

# Import models to register them with SQLModel
from vocab_trainer.models import models  # noqa: F401

# Import API router
from vocab_trainer.api.v1 import api_router
from vocab_trainer.api.v1.endpoints.study import stop_all_study_sessions

logging.basicConfig(
    level=settings.log_level.upper(),
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Vocab Trainer API", version="1.0.0")


def jsonable_errors(exc: RequestValidationError):
    # pydantic may put exception objects in "ctx"
    return [
        {key: (str(value) if key == "ctx" else value) for key, value in error.items()}
        for error in exc.errors()
    ]


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Log validation errors with full details for debugging."""
    body = await request.body()
    logger.error(f"Validation error on {request.method} {request.url.path}")
    logger.error(f"Validation errors: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": jsonable_errors(exc), "body": body.decode('utf-8') if body else None},
    )


@app.exception_handler(VocabTrainerException)
async def vocab_trainer_exception_handler(request: Request, exc: VocabTrainerException):
    """Handle application exceptions with their own status codes."""
    logger.warning(f"Application exception on {request.method} {request.url.path}: {type(exc).__name__}: {str(exc)}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": str(exc), "type": type(exc).__name__},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Catch all unhandled exceptions."""
    logger.error(f"Unhandled exception on {request.method} {request.url.path}", exc_info=exc)

    content = {"detail": "Internal server error", "type": "InternalServerError"}
    if settings.is_development:
        # Expose the failure only outside production
        content = {"detail": str(exc), "type": type(exc).__name__, "traceback": traceback.format_exc()}
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=content)


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def startup_event():
    """Create tables (SQL) or seed the demo store (local)."""
    backend = settings.resolved_backend
    logger.info(f"Starting Vocab Trainer API with {backend} storage")
    if backend == "sql":
        init_db()
    elif settings.seed_default_data:
        with open_repository() as repository:
            seed_default_data(repository, now=now_ms())


@app.on_event("shutdown")
async def shutdown_event():
    """Flush running study sessions."""
    # Stopping joins timer threads and writes the store
    stopped = await run_in_threadpool(stop_all_study_sessions)
    if stopped:
        logger.info(f"Flushed {stopped} study session(s) on shutdown")


@app.get("/")
async def root():
    return {"message": "Vocab Trainer API", "status": "running", "api": settings.api_v1_prefix, "docs": "/docs"}


@app.get("/health")
async def health():
    return {"status": "healthy", "storage": settings.resolved_backend}


app.include_router(api_router, prefix=settings.api_v1_prefix)
