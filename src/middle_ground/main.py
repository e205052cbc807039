"""Main entry point for the Middle Ground application."""

from __future__ import annotations

import asyncio
import logging
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from middle_ground.api.errors import SERVER_ERROR_MESSAGE, error_body, install_error_handlers
from middle_ground.api.v1 import auth_router, comments_router, likes_router, posts_router
from middle_ground.core.settings import settings

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Social feed that ranks posts by the political spread of their likes",
    version=settings.app_version,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

install_error_handlers(app)

# Include API routers
app.include_router(auth_router, prefix="/api/v1")
app.include_router(posts_router, prefix="/api/v1")
app.include_router(comments_router, prefix="/api/v1")
app.include_router(likes_router, prefix="/api/v1")


@app.middleware("http")
async def enforce_request_timeout(request: Request, call_next):
    # Read by the session dependency; storage work past this point is refused.
    request.state.deadline = time.monotonic() + settings.request_timeout_seconds
    try:
        return await asyncio.wait_for(call_next(request), timeout=settings.request_timeout_seconds)
    except TimeoutError:
        logger.error(
            "Request %s %s exceeded %.1fs",
            request.method,
            request.url.path,
            settings.request_timeout_seconds,
        )
        return JSONResponse(status_code=500, content=error_body(SERVER_ERROR_MESSAGE))


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("middle_ground.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
