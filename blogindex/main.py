import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.gzip import GZipMiddleware
from prometheus_client import make_asgi_app

from blogindex.middleware.access_log import AccessLogMiddleware
from blogindex.routers import admin, health, posts
from blogindex.schemas.index import ContentIndex
from blogindex.security import get_api_key
from blogindex.services.content_loader import build_site_from_settings
from blogindex.settings import settings

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.DEBUG:
        logger.info("Debug mode enabled")
        logger.info(f"Content dir: {settings.CONTENT_DIR}")
        logger.info(f"Include future: {settings.INCLUDE_FUTURE}")
        logger.info(f"Page size: {settings.PAGE_SIZE}")

    app.state.content_index = build_site_from_settings(settings)
    logger.info(
        f"Content index ready: {len(app.state.content_index.posts)} posts from {settings.CONTENT_DIR}"
    )

    try:
        yield
    finally:
        logger.info("Shutting down blog index")


app = FastAPI(
    title="Blog Index API",
    description="Frontmatter-driven post listings for a Markdown blog",
    lifespan=lifespan,
)
app.state.content_index = ContentIndex()

app.add_middleware(GZipMiddleware)
app.add_middleware(AccessLogMiddleware)

app.mount("/metrics", make_asgi_app())

app.include_router(health.router)
app.include_router(posts.router)
app.include_router(admin.router, dependencies=[Depends(get_api_key)])


@app.get("/")
async def root():
    return {"message": "Blog Index API is running"}
