"""rentbook FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from sqlalchemy.orm import sessionmaker

from rentbook.api.errors import register_error_handlers
from rentbook.api.routes import router
from rentbook.config import Settings, get_settings
from rentbook.services.db import create_session_factory, init_db

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    session_factory: sessionmaker | None = None,
) -> FastAPI:
    """Build the application.

    Args:
        settings: Settings to use (default: loaded from environment)
        session_factory: Session factory to inject (default: built from settings.database_url)
    """
    if settings is None:
        settings = get_settings()
    if session_factory is None:
        session_factory = create_session_factory(settings.database_url, settings.database_echo)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        init_db(session_factory.kw["bind"])
        logger.info("Database tables initialized")
        yield
        logger.info("Application shutting down")

    app = FastAPI(
        title=settings.api_title,
        description="Tenant, electricity billing and rent collection ledger",
        version=settings.api_version,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.session_factory = session_factory

    register_error_handlers(app)
    app.include_router(router)

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "ok"}

    return app


def run() -> None:
    """Run the API server with uvicorn."""
    import uvicorn
    from dotenv import load_dotenv

    from rentbook.services.logging import setup_server_logging

    # Export .env values to os.environ so LOG_LEVEL and friends are visible everywhere
    load_dotenv()
    settings = get_settings()
    setup_server_logging(settings)
    uvicorn.run(create_app(settings), host="0.0.0.0", port=8000)


if __name__ == "__main__":
    run()
