"""FastAPI application factory and main entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import config
import logging_config
from api import router as api_router
from api.errors import register_exception_handlers
from db import close_db, init_db

# Setup logging
logging_config.setup_logging(config.settings.LOG_LEVEL, sql_echo=config.settings.SQL_ECHO)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.
    """
    # Startup
    await init_db()
    yield
    # Shutdown
    await close_db()


# Create FastAPI app
app = FastAPI(
    title="Division Admin Backend",
    description="Division-scoped admin API for program form questions and the agent hierarchy",
    version="0.1.0",
    lifespan=lifespan,
)

# Configure CORS: admin clients are served from any origin and authenticate
# with the x-admin-token header rather than cookies
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=config.CORS_ALLOW_HEADERS,
)

register_exception_handlers(app)

# Include API router
app.include_router(api_router.api_router, prefix=config.settings.API_PREFIX)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Division Admin Backend API",
        "version": "0.1.0",
    }
