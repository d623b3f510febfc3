"""
Priority Credit Registry

FastAPI application entry point.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from priority_credit.config import get_settings
from priority_credit.database import async_session_maker, init_db, close_db
from priority_credit.api.v1 import router as api_v1_router
from priority_credit.api.middleware.rate_limit import RateLimitMiddleware
from priority_credit.api.middleware.request_id import RequestIdMiddleware
from priority_credit.orchestration.block_processor import BlockProcessor
from priority_credit.schemas.common import ErrorResponse, HealthResponse
from priority_credit.logging_config import configure_logging, get_logger

settings = get_settings()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan handler.

    Runs startup and shutdown tasks.
    """
    configure_logging(
        log_level=settings.log_level,
        environment=settings.environment,
        debug=settings.debug,
    )

    logger.info("Starting %s v%s", settings.app_name, settings.version)
    await init_db()
    logger.info("Database initialized")

    async with async_session_maker() as session:
        await BlockProcessor(session, settings).initialize()
        await session.commit()

    yield

    logger.info("Shutting down...")
    await close_db()
    logger.info("Database connections closed")


app = FastAPI(
    title=settings.app_name,
    description="""
    Priority Credit Registry

    Role-hierarchy authorization for the priority-credit program.

    ## Roles

    - **Administrator**: exactly one; appoints and revokes validators, may transfer the role
    - **Validator**: registers project developers
    - **Project developer**: registered once, tagged with a project name

    ## Blocks

    Calls are submitted as ordered blocks. Each call yields its own receipt;
    a failed call never rolls back or blocks the calls around it.
    """,
    version=settings.version,
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)

# add_middleware stacks innermost-first: request ID wraps rate limiting
app.add_middleware(RateLimitMiddleware)
app.add_middleware(RequestIdMiddleware)


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """Render HTTP errors as ErrorResponse, tagged with the request ID."""
    headers = {}
    req_id = getattr(request.state, "request_id", None)
    if req_id:
        headers["X-Request-ID"] = req_id
    body = ErrorResponse(
        detail=str(exc.detail),
        request_id=req_id if exc.status_code >= 500 else None,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(exclude_none=True),
        headers=headers,
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError,
):
    """Handle request validation errors."""
    errors = []
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error["loc"])
        errors.append({
            "field": field,
            "message": error["msg"],
            "type": error["type"],
        })
    headers = {}
    req_id = getattr(request.state, "request_id", None)
    if req_id:
        headers["X-Request-ID"] = req_id
    content = {"detail": "Validation error", "errors": errors}
    if req_id:
        content["request_id"] = req_id
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=content,
        headers=headers,
    )


@app.exception_handler(Exception)
async def general_exception_handler(
    request: Request,
    exc: Exception,
):
    """Handle unexpected exceptions."""
    logger.exception("Unhandled exception: %s", exc)
    req_id = getattr(request.state, "request_id", None)
    if settings.debug:
        body = ErrorResponse(detail=str(exc), code=type(exc).__name__, request_id=req_id)
    else:
        body = ErrorResponse(detail="Internal server error", request_id=req_id)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=body.model_dump(exclude_none=True),
    )


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check():
    """Check application health."""
    return HealthResponse(status="ok", version=settings.version)


@app.get("/", tags=["Root"])
async def root():
    """Root endpoint with API information."""
    return {
        "name": settings.app_name,
        "version": settings.version,
        "contract": settings.contract_name,
        "api": {
            "v1": settings.api_v1_prefix,
        },
    }


# Mount API v1 routes
app.include_router(
    api_v1_router,
    prefix=settings.api_v1_prefix,
)


# Main entry point for development
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "priority_credit.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
    )
