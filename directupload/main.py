"""
Development presign backend.

A small FastAPI app that issues presigned upload URLs the same way the
production backend does, so the upload pipeline can run end to end
against real S3-compatible storage.
"""
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST

from directupload.config import settings
from directupload.api.router import api_router
from directupload.storage.r2_client import get_r2_client
from directupload.utils.logging import configure_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup/shutdown events.
    - Startup: Configure logging and the storage client
    """
    configure_logging(f"{settings.service_name}-presign", settings.log_level)
    get_r2_client()
    yield


app = FastAPI(
    title="Direct Upload Presign API",
    description="Issues presigned URLs for direct-to-storage uploads",
    version="0.1.0",
    lifespan=lifespan
)

# CORS middleware (browser uploaders call this cross-origin)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix=settings.admin_prefix)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Direct Upload Presign API",
        "version": "0.1.0",
        "environment": settings.environment
    }


@app.get("/metrics")
async def metrics():
    """Prometheus metrics endpoint."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
