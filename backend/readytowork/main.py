from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from readytowork.core.config import settings
from readytowork.core.logging_config import configure_logging
from readytowork.db.base import Base
from readytowork.db.session import engine

# Import all models so SQLAlchemy can discover them for table creation
from readytowork.models import (  # noqa: F401
    User,
    Candidate,
    Employer,
    Notification,
    Media,
    Plan,
    Purchase,
    Interview,
    CandidateInteraction,
)

# Import API router
from readytowork.api.api import api_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging and create database tables on startup."""
    configure_logging()
    Base.metadata.create_all(bind=engine)
    yield


app = FastAPI(
    title=settings.APP_NAME,
    description="Account, session and notification backend for the Ready to Work marketplace",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS Middleware - allowlist from env (comma-separated)
ALLOWED_ORIGINS = [
    origin.strip()
    for origin in settings.BACKEND_CORS_ORIGINS.split(",")
    if origin.strip()
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["*"],
)


@app.get("/", tags=["Root"])
async def root():
    """Root endpoint."""
    return {"message": f"Welcome to {settings.APP_NAME} API"}


@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


# Include API router with /api prefix
app.include_router(api_router, prefix="/api")

# Uploaded files; the directory is created on first upload
app.mount("/media", StaticFiles(directory=settings.MEDIA_ROOT, check_dir=False), name="media")
