"""FastAPI application entry point."""

import os
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cli.logging_config import setup_logging
from web.auth import JWT_SECRET_ENV
from web.deps import get_config, get_storage
from web.routes import journal

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    config = get_config()
    setup_logging(json_mode=True, level=config.logging.level, log_file=config.paths.log_file)
    if not os.getenv(JWT_SECRET_ENV):
        logger.warning("web.jwt_secret_missing", env_var=JWT_SECRET_ENV)
    storage = get_storage()
    logger.info("web.startup", db_path=str(storage.db_path))
    yield
    logger.info("web.shutdown")


app = FastAPI(
    title="moodlog",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS: allow frontend origin
frontend_origin = os.getenv("FRONTEND_ORIGIN", "http://localhost:3000")
app.add_middleware(
    CORSMiddleware,
    allow_origins=[frontend_origin],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(journal.router)


@app.get("/api/health")
async def health():
    return {"status": "ok"}
