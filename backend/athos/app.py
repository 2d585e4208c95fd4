"""
Athos Explorer Backend
FastAPI application for learning content, quizzes, progress and adaptive recommendations
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .routes import adaptive_router, content_router, progress_router
from .routes import quizzes_router, users_router
from .services.database import init_database_service

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    logger.info("Starting up Athos Explorer API...")
    db_service = init_database_service()
    logger.info(f"Using database at {db_service.db_path}")
    yield
    await db_service.engine.dispose()
    logger.info("Shutdown complete.")


# Create FastAPI app
app = FastAPI(
    title="Athos Explorer API",
    description="Backend API for the Athos Explorer adaptive learning application",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(adaptive_router, prefix="/api/adaptive", tags=["adaptive"])
app.include_router(progress_router, prefix="/api/progress", tags=["progress"])
app.include_router(content_router, prefix="/api/content", tags=["content"])
app.include_router(quizzes_router, prefix="/api/quizzes", tags=["quizzes"])
app.include_router(users_router, prefix="/api/users", tags=["users"])


@app.get("/")
async def root():
    """Root endpoint"""
    return {"message": "Athos Explorer API is running", "version": __version__}


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy"}
