"""
Health check endpoint.
Reports whether object storage is configured.
"""
from fastapi import APIRouter, HTTPException

from directupload.storage.r2_client import get_r2_client

router = APIRouter()


@router.get("")
async def health_check():
    """
    Health check endpoint.
    Returns 503 when presigned URLs cannot be issued.
    """
    health_status = {
        "status": "healthy",
        "storage": "configured" if get_r2_client().is_configured else "not configured"
    }

    if health_status["storage"] != "configured":
        health_status["status"] = "unhealthy"
        raise HTTPException(status_code=503, detail=health_status)

    return health_status
