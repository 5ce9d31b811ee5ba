import os
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from .config import Settings
from .database import Database
from .errors import register_error_handlers
from .utils.admins import dummy_hash
from .utils.logging import get_logger, setup_logging

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    # Startup
    logger.info("🚀 Starting keygate...")

    db: Database = app.state.db
    db.create_tables()
    logger.info("✅ Database initialized")

    # Warm the unknown-email login path
    dummy_hash(app.state.settings.bcrypt_rounds)

    logger.info("🎯 keygate is ready!")

    yield

    # Shutdown
    logger.info("🛑 Shutting down keygate...")
    db.dispose()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application.

    Settings are read from the environment when not given. A missing
    JWT_SECRET makes this raise before anything starts.
    """
    if settings is None:
        settings = Settings()

    setup_logging(settings.log_level)

    app = FastAPI(
        title="keygate",
        description="API key issuing, user registration and admin key management",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.db = Database(settings.database_url)

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    @app.get("/health")
    def health_check():
        """Health check endpoint."""
        try:
            app.state.db.ping()
        except Exception as e:
            logger.error("health_check_failed", error=str(e))
            return JSONResponse(
                status_code=503,
                content={"status": "unhealthy", "database": "unavailable"},
            )
        return {"status": "healthy", "database": "connected"}

    # Include API routers
    from .api.admin import router as admin_router
    from .api.keys import router as keys_router
    from .api.users import router as users_router

    app.include_router(keys_router)
    app.include_router(users_router)
    app.include_router(admin_router)

    # Static files go last so they never shadow API routes
    if settings.static_dir and os.path.isdir(settings.static_dir):
        app.mount(
            "/", StaticFiles(directory=settings.static_dir, html=True), name="static"
        )
        logger.info("✅ Serving static files", directory=settings.static_dir)

    return app


def run():
    """Start the server with uvicorn."""
    import uvicorn

    settings = Settings()
    logger.info("🚀 Starting server...", host=settings.host, port=settings.port)
    uvicorn.run(
        "keygate.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level,
    )


# Development server
if __name__ == "__main__":
    run()
