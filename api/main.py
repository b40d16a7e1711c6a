"""Main FastAPI application."""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api import auth_routes, client_routes, profile_routes, trainer_routes
from config.settings import settings
from models.database import init_mongo, close_mongo_connection, get_database
from services.auth_service import AuthService
from services.store import DocumentStore
from utils.logger import setup_logger

logger = setup_logger(__name__)


def log_auth_state(principal_id: Optional[str]) -> None:
    """Auth-state listener registered at startup."""
    if principal_id:
        logger.info(f"Principal signed in: {principal_id}")
    else:
        logger.info("Principal signed out")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup/shutdown events."""
    # Startup
    logger.info("Starting application...")
    await init_mongo()
    app.state.store = DocumentStore(get_database())
    app.state.auth = AuthService(app.state.store, settings)
    unsubscribe = app.state.auth.subscribe(log_auth_state)
    logger.info("Application started successfully")

    yield

    # Shutdown
    logger.info("Shutting down application...")
    unsubscribe()
    await close_mongo_connection()
    logger.info("Application shut down")


def unique_origins(origins):
    """Drop duplicate origins, preserving order."""
    seen = set()
    result = []
    for origin in origins:
        if origin not in seen:
            seen.add(origin)
            result.append(origin)
    return result


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Trainer and client coaching API: plans, activity logs and progress",
    lifespan=lifespan,
)

frontend_origins = unique_origins([
    "http://localhost:5173",  # Vite default
    "http://127.0.0.1:5173",
    "http://localhost:3000",  # React default
    "http://127.0.0.1:3000",
] + settings.cors_origins)

logger.info(f"CORS configured with origins: {frontend_origins}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=frontend_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    max_age=600,
)

app.include_router(auth_routes.router)
app.include_router(profile_routes.router)
app.include_router(client_routes.router)
app.include_router(trainer_routes.router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": settings.app_name,
        "version": settings.app_version,
        "status": "running"
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": settings.app_name
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
