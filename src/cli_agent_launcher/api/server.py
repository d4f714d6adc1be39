from contextlib import asynccontextmanager
import asyncio
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from cli_agent_launcher.utils.logging import setup_logging
from cli_agent_launcher.api.config import router as config_router
from cli_agent_launcher.services.profile_service import get_cached_profiles
from cli_agent_launcher.services.settings_service import settings_store
from cli_agent_launcher.constants import SERVER_HOST, SERVER_PORT, SERVER_VERSION, CORS_ORIGINS

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    logger.info("Starting CLI Agent Launcher server...")
    settings = settings_store.load()
    profiles = get_cached_profiles()
    logger.info(f"Loaded {len(profiles.profiles)} profiles, selected: {settings.profile}")
    yield
    # Shutdown
    logger.info("Shutting down CLI Agent Launcher server...")


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    app = FastAPI(
        title="CLI Agent Launcher",
        description="CLI Agent Launcher",
        version=SERVER_VERSION,
        lifespan=lifespan,
    )

    # Configure CORS for local development
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(config_router)

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "ok", "service": "cli-agent-launcher"}

    logger.info("FastAPI application created successfully")
    return app


app = create_app()


def main():
    """Main entry point for cal-server command."""
    setup_logging()

    config = uvicorn.Config(
        app,
        host=SERVER_HOST,
        port=SERVER_PORT,
        log_level="info"
    )
    server = uvicorn.Server(config)
    asyncio.run(server.serve())
