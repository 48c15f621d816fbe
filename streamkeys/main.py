"""StreamKeys — FastAPI application entry point.

Registers the keyspace and key codec routers.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from streamkeys.api import health, keys, keyspaces
from streamkeys.core.config import settings
from streamkeys.core.keyspace_loader import list_keyspaces

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Report configured keyspaces on startup."""
    logger.info("Starting StreamKeys backend...")
    available = list_keyspaces()
    if not available:
        logger.warning(f"No keyspaces found in '{settings.keyspaces_dir}'")
    else:
        logger.info(f"Keyspaces available: {', '.join(available)}")
    yield
    logger.info("StreamKeys backend stopped")


app = FastAPI(
    title="StreamKeys",
    version="0.1.0",
    description="Ordered, human-readable stream entry keys: encode, decode "
                "and enumerate fixed-width counters.",
    lifespan=lifespan,
)

# --- Top-level routes (not keyspace-scoped) ---
app.include_router(health.router, prefix="/api", tags=["health"])
app.include_router(keyspaces.router, prefix="/api", tags=["keyspaces"])

# --- Keyspace-scoped routes: /api/k/{name}/... ---
app.include_router(keys.router, prefix="/api/k/{name}", tags=["keys"])
