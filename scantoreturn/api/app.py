"""FastAPI app, CORS, and route registration."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Configure logging in the worker process (so degradation warnings are visible with uvicorn --reload)
logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s: %(name)s: %(message)s",
)

from scantoreturn.api.state import AppState, get_state
from scantoreturn.config import ensure_data_dir

# Import routes after state to avoid circular imports
from scantoreturn.api.routes import assist, scan, settings, tags

__all__ = ["app", "AppState", "get_state"]


@asynccontextmanager
async def lifespan(app: FastAPI):
    ensure_data_dir()
    state = get_state()
    state.cache.ensure_seeded()
    logging.getLogger(__name__).info(
        "Tag cache at %s, endpoint %s", state.cache.path, state.endpoint or "(local only)"
    )
    yield


app = FastAPI(
    title="ScanToReturn API",
    description="Resolve and activate lost-and-found QR tags",
    lifespan=lifespan,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(scan.router, prefix="/api/scan", tags=["scan"])
app.include_router(tags.router, prefix="/api/tags", tags=["tags"])
app.include_router(settings.router, prefix="/api/settings", tags=["settings"])
app.include_router(assist.router, prefix="/api/assist", tags=["assist"])
