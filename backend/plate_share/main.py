"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from plate_share import __version__
from plate_share.config import settings
from plate_share.routers import notation, share
from plate_share.services import ShortLinkStore

logging.basicConfig(level=logging.DEBUG if settings.debug else logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the short link store once for the whole process."""
    app.state.short_link_store = ShortLinkStore(
        settings.short_links_path,
        id_length=settings.short_id_length
    )
    logger.info(f"Short link store at {settings.short_links_path}")
    yield


app = FastAPI(
    title=settings.app_name,
    description="Compact plate notation and short links for assay plate layouts",
    version=__version__,
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(share.router, prefix="/api/shorten", tags=["share"])
app.include_router(share.redirect_router, prefix="/s", tags=["share"])
app.include_router(notation.router, prefix="/api/notation", tags=["notation"])


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"status": "ok", "app": settings.app_name}


@app.get("/health")
async def health(request: Request):
    """Health check endpoint."""
    store: ShortLinkStore = request.app.state.short_link_store
    return {"status": "healthy", "short_links": await store.count()}
