"""FastAPI application entry point."""

import os
import sys
import logging
import tomllib
from contextlib import asynccontextmanager
from pathlib import Path
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

# Must run before anything reads token or store settings
load_dotenv()

# main.py is at <root>/src/api/main.py; src is two levels up
_src_path = Path(__file__).parent.parent
sys.path.insert(0, str(_src_path))

from api.middleware.request_logging import RequestLoggingMiddleware
from api.routes import auth, health
from utils.logging import setup_structured_logging
from utils.settings import get_user_store_backend

setup_structured_logging()

logger = logging.getLogger(__name__)

# Read version from pyproject.toml (single source of truth)
_project_root = _src_path.parent
with open(_project_root / "pyproject.toml", "rb") as f:
    VERSION = tomllib.load(f)["project"]["version"]

SERVICE_NAME = "Local Auth API"


def _prepare_user_store() -> None:
    """Create indexes (MongoDB) or tables (SQL) for the configured user store."""
    backend = get_user_store_backend()
    if backend == 'sql':
        from adapter.sqlalchemy.session import create_tables, get_engine
        create_tables(get_engine())
        return

    from adapter.mongodb.connection import get_mongodb_client, DATABASE_NAME
    from adapter.mongodb.user_repository import MongoUserRepository

    client = get_mongodb_client()
    if not client:
        logger.warning("MongoDB unavailable, skipping index creation")
        return
    if MongoUserRepository(client[DATABASE_NAME]).ensure_indexes():
        logger.info("MongoDB indexes verified/created successfully")
    else:
        logger.warning("Failed to create users indexes")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: startup and shutdown logic."""
    _prepare_user_store()
    yield


app = FastAPI(
    title=SERVICE_NAME,
    description="Local email/password authentication with rotating refresh tokens",
    version=VERSION,
    lifespan=lifespan,
)

# With CORS_ORIGINS="*" credentials must stay disabled (browsers reject the combination)
cors_origins_env = os.getenv("CORS_ORIGINS", "*")
if cors_origins_env == "*":
    cors_origins = ["*"]
    allow_credentials = False
    logger.warning(
        "CORS configured with wildcard origin ('*'). "
        "For production, set CORS_ORIGINS to specific domains (e.g., 'https://app.example.com')"
    )
else:
    cors_origins = [origin.strip() for origin in cors_origins_env.split(",")]
    allow_credentials = True
    logger.info(f"CORS configured with specific origins: {cors_origins}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestLoggingMiddleware)

app.include_router(auth.router)
app.include_router(health.router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "service": SERVICE_NAME,
        "version": VERSION,
        "status": "running"
    }


if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", 3000))
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=port,
        access_log=False
    )
