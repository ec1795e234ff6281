"""FastAPI application factory and main entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

import config
import logging_config
from api import router as api_router
from repos.storage import build_storage
from services.users_service import ensure_admin_user

# Setup logging
logging_config.setup_logging(config.settings.LOG_LEVEL)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.
    """
    # Startup
    storage = build_storage(config.settings)
    await storage.init()
    if config.settings.SEED_ADMIN_USER:
        await ensure_admin_user(storage, config.settings)
    app.state.storage = storage
    yield
    # Shutdown
    await storage.close()


# Create FastAPI app
app = FastAPI(
    title="Business Records Backend",
    description="Clients, projects, tasks, billing and support records with a dashboard",
    version="0.1.0",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies, ids and query values are client errors (400)."""
    errors = [
        {"loc": list(err["loc"]), "msg": err["msg"], "type": err["type"]}
        for err in exc.errors()
    ]
    logger.debug("Rejected %s %s: %s", request.method, request.url.path, errors)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=jsonable_encoder({"detail": {"message": "Invalid data", "errors": errors}}),
    )


# Include API router
app.include_router(api_router.api_router, prefix=config.settings.API_PREFIX)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Business Records Backend API",
        "version": "0.1.0",
    }
