#!/usr/bin/env python3
"""
ResumeRAG API - FastAPI Application

Resume upload, free-text search over resumes and job matching with evidence.

Usage:
    python -m web.backend.app

Then open:
    - http://localhost:8080/api/_meta - API description (default port, configurable in config.yaml)
    - http://localhost:8080/docs - API Documentation (Swagger UI)
    - http://localhost:8080/redoc - Alternative API Documentation
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from database.init_db import init_db
from .config import get_config
from .dependencies import get_db_manager
from .exceptions import (
    ServiceException,
    service_exception_handler,
    http_exception_handler,
    validation_exception_handler,
    general_exception_handler
)
from .models.responses import HealthResponse, MetaResponse
from .rate_limit import add_rate_limit_handlers
from .routers import (
    auth_router,
    resumes_router,
    jobs_router,
    search_router,
    applications_router,
    admin_router
)
from .utils import utc_now_iso

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"

# Load configuration
config = get_config()


@asynccontextmanager
async def lifespan(app: FastAPI):
    manager = get_db_manager()
    init_db(manager.engine, session_factory=manager.SessionLocal, seed=config.seed.enabled)
    yield


# Create FastAPI app
app = FastAPI(
    title="ResumeRAG API",
    description="Resume search and job match API",
    version=API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# Configure rate limiting
add_rate_limit_handlers(app)

# Register exception handlers
app.add_exception_handler(ServiceException, service_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, general_exception_handler)

# Include routers
app.include_router(auth_router)
app.include_router(resumes_router)
app.include_router(jobs_router)
app.include_router(search_router)
app.include_router(applications_router)
app.include_router(admin_router)


@app.get("/api/health", response_model=HealthResponse)
def health_check():
    """Health check endpoint."""
    return HealthResponse(status="healthy", timestamp=utc_now_iso(), version=API_VERSION)


@app.get("/api/_meta", response_model=MetaResponse)
def meta():
    """Describe the API and its top-level endpoints."""
    return MetaResponse(
        name="ResumeRAG API",
        version=API_VERSION,
        description="Resume Search & Job Match API",
        endpoints={
            "auth": "/api/auth",
            "resumes": "/api/resumes",
            "jobs": "/api/jobs",
            "search": "/api/ask",
            "applications": "/api/applications",
            "admin": "/api/admin"
        }
    )


def main():
    """Run the web server."""
    import uvicorn

    logger.info(f"Starting ResumeRAG API on {config.web.host}:{config.web.port}")
    logger.info(f"API Docs: http://{config.web.host}:{config.web.port}/docs")

    uvicorn.run(
        "web.backend.app:app",
        host=config.web.host,
        port=config.web.port,
        reload=False,
        log_level="info"
    )


if __name__ == "__main__":
    main()
