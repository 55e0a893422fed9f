"""
Kitchen FastAPI application.

Main application entry point with route registration and CORS.
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import logging

from kitchen.config import settings
from kitchen.api.routes import recipes
from kitchen.engine.parsing import get_parse_cache

# Configure logging with configurable level
_log_level = getattr(logging, settings.log_level.upper(), logging.INFO)
logging.basicConfig(
    level=_log_level,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.
    """
    # Startup
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")

    yield

    # Shutdown
    logger.info("Shutting down application...")
    get_parse_cache().clear()


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Recipe document parsing and shopping list API",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(recipes.router)


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "status": "running",
        "docs": "/docs",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint with parse cache statistics."""
    return {
        "status": "healthy",
        "version": settings.app_version,
        "parse_cache_entries": get_parse_cache().size,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "kitchen.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
    )
