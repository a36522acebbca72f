"""
Cronara API - Main FastAPI Application
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
import structlog

from cronara.config import get_settings
from cronara.database import create_engine, create_session_factory, init_db, close_db
from cronara.errors import ServiceError
from cronara.logging_config import configure_logging
from cronara.api.v1.router import api_router

settings = get_settings()
logger = structlog.get_logger(__name__)

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle startup and shutdown events."""
    # Startup
    configure_logging(settings)
    logger.info("starting", service=settings.APP_NAME, version=VERSION)
    engine = create_engine()
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    await init_db(engine)
    logger.info("database_initialized")

    yield

    # Shutdown
    logger.info("shutting_down")
    await close_db(engine)
    logger.info("database_connections_closed")


# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    description="Appointments, staff and business administration for small businesses",
    version=VERSION,
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def error_response(status_code: int, message: str, **extra) -> JSONResponse:
    """Every error leaves the API as {"error": message}."""
    return JSONResponse(status_code=status_code, content={"error": message, **extra})


# Exception handlers
@app.exception_handler(ServiceError)
async def service_exception_handler(request: Request, exc: ServiceError):
    """Validation, store, not-found and auth failures."""
    extra = {}
    if settings.DEBUG and exc.detail:
        extra["detail"] = exc.detail
    return error_response(exc.status_code, exc.message, **extra)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies and query strings."""
    errors = []
    for error in exc.errors():
        errors.append({
            "field": ".".join(str(x) for x in error["loc"]),
            "message": error["msg"],
            "type": error["type"],
        })

    return error_response(status.HTTP_400_BAD_REQUEST, "Datos inválidos", errors=errors)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Routing errors (404, 405) in the same error shape."""
    return error_response(exc.status_code, str(exc.detail))


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception("unhandled_exception", path=request.url.path)
    if settings.DEBUG:
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            str(exc),
            type=type(exc).__name__,
        )
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "No pudimos procesar la solicitud",
    )


# Include routers
app.include_router(api_router, prefix=settings.API_PREFIX)


# Health check endpoint
@app.get("/health")
async def health_check():
    """Health check endpoint for load balancers."""
    return {"status": "healthy", "service": settings.APP_NAME}


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "service": settings.APP_NAME,
        "version": VERSION,
        "docs": "/docs",
    }
