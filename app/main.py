from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from datetime import datetime, timezone
from typing import Optional
import uvicorn
import logging
from contextlib import asynccontextmanager

from app.core.config import Settings, get_settings
from app.core.database import create_engine, create_session_factory, init_db
from app.core.exceptions import register_exception_handlers
from app.core.logging import setup_logging
from app.core.security import PasswordHasher, TokenService
from app.api.api import api_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    # Startup
    logger.info(f"Starting up {app.state.settings.APP_NAME}...")
    await init_db(app.state.engine)
    logger.info(f"{app.state.settings.APP_NAME} startup complete")

    yield

    # Shutdown
    logger.info(f"Shutting down {app.state.settings.APP_NAME}...")
    await app.state.engine.dispose()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application around an explicit settings object"""
    if settings is None:
        settings = get_settings()

    setup_logging(settings)

    app = FastAPI(
        title=settings.APP_NAME,
        description="Authentication and energy readings for the personal energy-monitoring dashboard",
        version=settings.VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan
    )

    engine = create_engine(settings)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    app.state.password_hasher = PasswordHasher(settings)
    app.state.token_service = TokenService(settings)

    # Add middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_HOSTS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_middleware(
        TrustedHostMiddleware,
        allowed_hosts=settings.ALLOWED_HOSTS
    )

    register_exception_handlers(app)

    # Include API routes
    app.include_router(api_router, prefix="/api")

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {
            "status": "healthy",
            "service": settings.APP_NAME,
            "version": settings.VERSION,
            "timestamp": datetime.now(timezone.utc).isoformat()
        }

    @app.get("/")
    async def root():
        """Root endpoint"""
        return {
            "message": "Smart Energy Monitor API",
            "version": settings.VERSION,
            "docs": "/docs",
            "endpoints": {
                "register": "POST /api/register",
                "login": "POST /api/login",
                "profile": "GET /api/profile",
                "readings": "GET /api/readings",
                "submit": "POST /api/readings",
                "health": "GET /health"
            }
        }

    return app


if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run(
        "app.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level="info"
    )
