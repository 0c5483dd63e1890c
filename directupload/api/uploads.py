"""
Presign endpoint for the development backend.

Implements the authorization half of the direct-to-storage flow:
POST /admin/posts/presign - Get a presigned PUT URL and storage key

The uploader then PUTs the bytes straight to storage; this service never
sees them.
"""
import secrets
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from directupload.config import settings
from directupload.schemas.upload import PresignRequest, PresignServerResponse
from directupload.storage.presign import PresignService

router = APIRouter()

# auto_error=False so an unset presign_api_token leaves the endpoint open
security = HTTPBearer(auto_error=False)


async def require_api_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> None:
    """
    Require the configured Bearer token, if one is configured.

    Raises:
        HTTPException 401: If the token is missing or wrong
    """
    expected = settings.presign_api_token
    if not expected:
        return

    if credentials is None or not secrets.compare_digest(credentials.credentials, expected):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or missing authentication token",
            headers={"WWW-Authenticate": "Bearer"},
        )


@router.post("/presign", response_model=PresignServerResponse)
async def presign_upload(
    request: PresignRequest,
    _: None = Depends(require_api_token)
):
    """
    Generate a presigned URL for direct upload to R2.

    Returns both response shapes uploaders understand: {url, key} and
    {presignedUrl, fileUrl, key}.
    """
    upload_url, object_key, file_url, error = PresignService.create_presigned_upload(
        filename=request.filename,
        content_type=request.content_type
    )

    if error:
        if error == "Storage service not configured":
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail=error
            )
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=error
        )

    return PresignServerResponse(
        url=upload_url,
        key=object_key,
        presignedUrl=upload_url,
        fileUrl=file_url,
        expires_in=settings.r2_presign_expiration
    )
