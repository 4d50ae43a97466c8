"""FastAPI application definition."""

from __future__ import annotations

from fastapi import FastAPI

from nsregistry import __version__

from .deps import lifespan
from .routes import api_router

app = FastAPI(
    title="nsregistry",
    description="Namespace membership and maintainership for a package registry",
    version=__version__,
    lifespan=lifespan,
    redirect_slashes=False,  # Prevent 307 redirects that lose auth headers
)

# Include API routes
app.include_router(api_router, prefix="/api/v1")


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}
