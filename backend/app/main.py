import asyncio
import logging
import time
from contextlib import asynccontextmanager, suppress

from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from app.api import auth, vehicle, fuel, parts
from app.api.deps import require_session
from app.core.config import settings
from app.core.database import check_database_health, create_tables
from app.core.exceptions import AuthError, CarTrackError, StorageError
from app.core.logging_config import configure_logging
from app.core.rate_limit import RateLimitMiddleware
from app.core.sessions import InMemorySessionStore, SessionStore
from app.services.auth_service import sweep_sessions_periodically
from app.services.media_store import MediaStore

logger = logging.getLogger(__name__)

API_PREFIX = "/api"


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    logger.info("CarTrack backend starting up...")
    create_tables(app.state.db_engine)
    # Unwritable media storage is fatal
    app.state.media_store.ensure_ready()

    sweeper = asyncio.create_task(
        sweep_sessions_periodically(app.state.session_store, settings.SESSION_SWEEP_INTERVAL_SECONDS)
    )
    try:
        yield
    finally:
        sweeper.cancel()
        with suppress(asyncio.CancelledError):
            await sweeper
        logger.info("CarTrack backend shutting down...")


def error_body(exc: CarTrackError) -> dict:
    body = {"error": exc.message}
    if isinstance(exc, AuthError):
        body["sessionExpired"] = True
    return body


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(CarTrackError)
    async def cartrack_error_handler(request: Request, exc: CarTrackError):
        if isinstance(exc, StorageError):
            logger.error(f"Storage failure on {request.method} {request.url.path}: {exc.message}")
            return JSONResponse(status_code=exc.status_code, content={"error": "Internal server error"})
        return JSONResponse(status_code=exc.status_code, content=error_body(exc))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        if errors:
            first = errors[0]
            field = ".".join(str(loc) for loc in first.get("loc", ()) if loc != "body")
            message = f"Invalid {field}: {first.get('msg')}" if field else first.get("msg")
        else:
            message = "Invalid request"
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": message})

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
        )


def create_app(
    session_store: SessionStore = None,
    media_store: MediaStore = None,
    db_engine=None,
    rate_limit: bool = True,
) -> FastAPI:
    app = FastAPI(
        title="CarTrack API",
        description="Personal car tracking: fuel log, parts inventory and insurance reminders",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.state.session_store = session_store if session_store is not None else InMemorySessionStore()
    app.state.media_store = (
        media_store if media_store is not None
        else MediaStore(settings.MEDIA_PATH, staging=settings.MEDIA_STAGING_PATH)
    )
    app.state.db_engine = db_engine

    # Rate limiting middleware
    if rate_limit:
        app.add_middleware(
            RateLimitMiddleware,
            requests_per_minute=settings.RATE_LIMIT_PER_MINUTE,
            requests_per_hour=settings.RATE_LIMIT_PER_HOUR,
        )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.time()
        response = await call_next(request)
        duration = round((time.time() - start) * 1000, 2)
        logger.debug(f"{request.method} {request.url.path} -> {response.status_code} ({duration}ms)")
        return response

    register_exception_handlers(app)

    # Include routers
    protected = [Depends(require_session)]
    app.include_router(auth.router, prefix=f"{API_PREFIX}/auth", tags=["Authentication"])
    app.include_router(vehicle.router, prefix=f"{API_PREFIX}/cars", tags=["Cars"], dependencies=protected)
    app.include_router(fuel.router, prefix=API_PREFIX, tags=["Fuel"], dependencies=protected)
    app.include_router(parts.router, prefix=API_PREFIX, tags=["Parts"], dependencies=protected)

    # Uploaded pictures; the directory is created during startup
    app.mount(
        settings.MEDIA_URL_PREFIX,
        StaticFiles(directory=str(app.state.media_store.root), check_dir=False),
        name="media",
    )

    @app.get("/")
    async def root():
        return {"message": "CarTrack API", "version": "1.0.0"}

    @app.get("/health")
    def health_check():
        return {"status": "healthy", "database": check_database_health()}

    return app


app = create_app()
