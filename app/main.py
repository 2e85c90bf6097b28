"""
Resource Map - FastAPI Application Entry Point

A map directory of social-services resources (shelters, food, water, wifi,
weather stations, restrooms, health services) with an authenticated admin
API for managing entries.

DESIGN PRINCIPLES:
- Reads are public; every mutation requires an admin session
- The store is an explicit instance owned by the app, not a global
- Unknown city names fail open (all resources), on purpose
- Internal errors are logged in full and reported generically
"""

from typing import Optional
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.errors import AppError
from app.core.settings import Settings, settings
from app.routes import auth, cities, health, map, resources
from app.services.auth_service import AuthService
from app.services.session_store import FirestoreSessionStore, MemorySessionStore, SessionStore
from app.services.storage import BaseStore, build_store

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


def _field_name(loc) -> str:
    parts = [str(p) for p in loc if p not in ("body", "query", "path")]
    return ".".join(parts) or "body"


def build_session_store(config: Settings, store: BaseStore) -> SessionStore:
    if config.STORE_BACKEND.lower() == "firestore":
        return FirestoreSessionStore(store.db, ttl_minutes=config.SESSION_TTL_MINUTES)
    return MemorySessionStore(ttl_minutes=config.SESSION_TTL_MINUTES)


def register_exception_handlers(app: FastAPI) -> None:

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Body/query validation failures become a 400 with one entry per offending field."""
        errors = [{"field": _field_name(e.get("loc", ())), "message": e.get("msg", "")} for e in exc.errors()]
        logger.info(f"Validation error on {request.method} {request.url.path}: {errors}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": "Validation error", "errors": errors},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"message": exc.detail}, headers=exc.headers)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Catch all unhandled exceptions, log the traceback, leak nothing."""
        logger.exception(f"Unhandled exception on {request.method} {request.url.path}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Internal server error"},
        )


def create_app(
    store: Optional[BaseStore] = None,
    sessions: Optional[SessionStore] = None,
    config: Settings = settings,
) -> FastAPI:
    """
    Build the application around an explicit store.

    When no store is given the configured backend is built at startup, so
    importing this module never opens a database connection.
    """
    app = FastAPI(
        title=config.APP_NAME,
        version=config.APP_VERSION,
        description="Map directory of social-services resources with an admin API",
        debug=config.DEBUG,
    )
    app.state.settings = config
    app.state.store = store
    app.state.sessions = sessions

    register_exception_handlers(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.on_event("startup")
    async def startup_event():
        logger.info(f"Starting {config.APP_NAME} v{config.APP_VERSION}")
        if app.state.store is None:
            app.state.store = build_store()
        if app.state.sessions is None:
            app.state.sessions = build_session_store(config, app.state.store)

        created = AuthService(app.state.store).ensure_user(
            config.DEFAULT_ADMIN_USERNAME, config.DEFAULT_ADMIN_PASSWORD
        )
        if created is not None:
            logger.info(f"[STARTUP] Created default admin account '{created.username}'")

    @app.on_event("shutdown")
    async def shutdown_event():
        logger.info(f"Shutting down {config.APP_NAME}")

    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(resources.router)
    app.include_router(cities.router)
    app.include_router(map.router)

    @app.get("/")
    async def root():
        """Root endpoint - API information."""
        return {
            "service": config.APP_NAME,
            "version": config.APP_VERSION,
            "status": "running",
            "docs": "/docs",
            "health": "/health",
            "resources": "/api/resources?city={city_name}",
        }

    return app


app = create_app()
