from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .application.dtos import ApiResponse
from .config import settings
from .infrastructure.logging import configure_logging
from .presentation.api.dependencies import get_database
from .presentation.api.v1 import communications, donors, health
from .presentation.middleware import CorrelationIdMiddleware

configure_logging(settings.service_name)

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    logger.info("Starting application", service=settings.service_name)

    db = get_database()
    if settings.create_tables_on_startup:
        try:
            await db.create_tables()
            logger.info("Database tables created", db_host=settings.db_host, db_name=settings.db_name)
        except Exception as e:
            logger.error(
                "Failed to create database tables",
                error=str(e),
                error_type=type(e).__name__,
                db_host=settings.db_host,
                db_name=settings.db_name,
                exc_info=True,
            )
            raise

    yield

    await db.close()
    logger.info("Application shutdown complete")


def _validation_message(exc: RequestValidationError) -> str:
    """First readable validation message, without pydantic's prefixes."""
    for error in exc.errors():
        original = (error.get("ctx") or {}).get("error")
        if original is not None:
            return str(original)
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        message = error.get("msg", "Invalid request")
        return f"{location}: {message}" if location else message
    return "Invalid request"


app = FastAPI(
    title="Appeal Communications API",
    description="Notify appeal donors across email, SMS and chat with batch audit history",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(CorrelationIdMiddleware)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = _validation_message(exc)
    logger.warning("Invalid request", error=message)
    body = ApiResponse(success=False, message=message)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=body.model_dump(mode="json"))


app.include_router(health.router)
app.include_router(communications.router, prefix="/api/v1")
app.include_router(donors.router, prefix="/api/v1")


@app.get("/")
def root() -> dict:
    return {
        "service": settings.service_name,
        "version": "0.1.0",
        "docs": "/docs",
    }
