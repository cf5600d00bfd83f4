from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from alembic import command
from alembic.config import Config
from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI  # noqa: E402
from fastapi.middleware.cors import CORSMiddleware  # noqa: E402

from . import settings  # noqa: E402
from .exception_handlers import register_exception_handlers  # noqa: E402
from .routers import (  # noqa: E402
    channels,
    comments,
    likes,
    playlists,
    subscriptions,
    system,
    tweets,
    videos,
)

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"

_STARTUP_COMPLETE = False


def run_migrations() -> None:
    logger.info("Running Alembic migrations...")
    try:
        command.upgrade(_alembic_config(), "head")
    except Exception as e:
        logger.error(f"run_migrations: Error occurred: {e}", exc_info=True)
        raise
    logger.info("run_migrations: Completed successfully.")


def _alembic_config() -> Config:
    base_dir = Path(__file__).resolve().parent.parent
    cfg = Config(str(base_dir / "alembic.ini"))
    cfg.set_main_option("script_location", str(base_dir / "alembic"))
    return cfg


def run_startup_tasks() -> None:
    global _STARTUP_COMPLETE
    if _STARTUP_COMPLETE:
        logger.info("run_startup_tasks: Already completed, skipping.")
        return
    if settings.RUN_MIGRATIONS:
        run_migrations()
    else:
        logger.info("run_startup_tasks: Migrations disabled, skipping.")
    _STARTUP_COMPLETE = True
    logger.info("Startup tasks completed.")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting application...")
    # Server won't accept requests until these complete
    run_startup_tasks()
    logger.info("VidTube API server ready")
    yield
    logger.info("Shutting down application...")


app = FastAPI(
    title="VidTube API",
    version="1.0.0",
    description="Video sharing backend: comments, likes, subscriptions, tweets and playlists",
    lifespan=lifespan,
)

if settings.CORS_ORIGINS == "*":
    logger.warning(
        "CORS is configured to allow all origins. "
        "This is insecure for production. Set CORS_ORIGINS to specific domains."
    )
cors_origins = [origin.strip() for origin in settings.CORS_ORIGINS.split(",")]

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "Accept", "Origin", "X-Requested-With"],
    max_age=600,
)

register_exception_handlers(app)

app.include_router(system.router)
app.include_router(channels.router, prefix=API_PREFIX)
app.include_router(videos.router, prefix=API_PREFIX)
app.include_router(comments.router, prefix=API_PREFIX)
app.include_router(tweets.router, prefix=API_PREFIX)
app.include_router(likes.router, prefix=API_PREFIX)
app.include_router(subscriptions.router, prefix=API_PREFIX)
app.include_router(playlists.router, prefix=API_PREFIX)
