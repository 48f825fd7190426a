"""
Event Booking System - FastAPI Backend
Main application entry point
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
import uvicorn

from eventbook.core.config import settings
from eventbook.core.db import StoreConnector
from eventbook.core.errors import DomainError, StoreUnavailableError
from eventbook.api import routes_admin, routes_public
from eventbook.utils.responses import domain_error_response, error_response

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management"""
    # The store is opened lazily on the first request that needs it
    app.state.store = StoreConnector(settings)
    logger.info("Store connector ready")
    yield
    await app.state.store.close()
    logger.info("Application shutdown")

# Create FastAPI application
app = FastAPI(
    title="Event Booking System",
    description="Backend for event listings and bookings",
    version="1.0.0",
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError):
    """Map domain errors to the error envelope"""
    if isinstance(exc, StoreUnavailableError):
        logger.error(f"Store unavailable on {request.url.path}: {exc.reason}")
    return domain_error_response(exc)

@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    """Last-resort handler; details stay in the log"""
    logger.exception(f"Unexpected error on {request.url.path}: {exc}")
    return error_response(message="Internal server error", status_code=500)

# Include routers
app.include_router(routes_public.router, tags=["public"])
app.include_router(routes_admin.router, prefix="/admin", tags=["admin"])

# Note: Run this ASGI app directly with Uvicorn or Hypercorn. For Gunicorn,
# use `uvicorn.workers.UvicornWorker` instead of wrapping the app.

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host="127.0.0.1",
        port=8000,
        reload=True
    )
