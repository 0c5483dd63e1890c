"""
Presigned URL generation service for the development backend.

Flow:
1. Uploader requests a presign URL with filename and content_type
2. Backend generates a unique object key and a presigned PUT URL
3. Uploader PUTs the bytes directly to R2
"""
import uuid
import logging
from datetime import datetime, timezone
from typing import Optional, Tuple

from directupload.config import settings
from directupload.storage.r2_client import get_r2_client

logger = logging.getLogger(__name__)

# Mapping of image content types to file extensions
CONTENT_TYPE_EXTENSIONS = {
    'image/jpeg': 'jpg',
    'image/jpg': 'jpg',
    'image/png': 'png',
    'image/gif': 'gif',
    'image/webp': 'webp',
    'image/svg+xml': 'svg',
    'image/heic': 'heic',
    'image/heif': 'heif',
}


class PresignService:
    """
    Service for handling presigned upload operations.

    Responsibilities:
    - Validate upload requests
    - Generate unique object keys
    - Create presigned URLs
    """

    @staticmethod
    def validate_content_type(content_type: str) -> bool:
        """Only image content types may be uploaded."""
        return content_type.lower().startswith(settings.allowed_mime_prefix)

    @staticmethod
    def get_extension(content_type: str, filename: str) -> str:
        """
        Get file extension for a content type.

        Falls back to the filename's own extension, then "bin".
        """
        extension = CONTENT_TYPE_EXTENSIONS.get(content_type.lower())
        if extension:
            return extension
        if '.' in filename:
            return filename.rsplit('.', 1)[1].lower()
        return 'bin'

    @staticmethod
    def generate_object_key(filename: str, content_type: str, now: Optional[datetime] = None) -> str:
        """
        Generate a unique object key for the upload.

        Pattern: uploads/{yyyy}/{mm}/{uuid}.{ext}

        The client-chosen filename only contributes its extension, so two
        uploads never collide and no path can be injected.
        """
        now = now or datetime.now(timezone.utc)
        extension = PresignService.get_extension(content_type, filename)
        return f"uploads/{now:%Y}/{now:%m}/{uuid.uuid4()}.{extension}"

    @staticmethod
    def create_presigned_upload(
        filename: str,
        content_type: str
    ) -> Tuple[Optional[str], Optional[str], Optional[str], Optional[str]]:
        """
        Create a presigned upload URL.

        Args:
            filename: Name the uploader chose
            content_type: MIME type of the file

        Returns:
            Tuple of (upload_url, object_key, file_url, error_message)
            On success: (url, key, file_url or None, None)
            On error: (None, None, None, error_message)
        """
        if not PresignService.validate_content_type(content_type):
            return None, None, None, f"Invalid content type '{content_type}'"

        r2 = get_r2_client()
        if not r2.is_configured:
            logger.error("R2 storage not configured, cannot generate presigned URL")
            return None, None, None, "Storage service not configured"

        object_key = PresignService.generate_object_key(filename, content_type)

        upload_url = r2.generate_presigned_upload_url(object_key, content_type)
        if not upload_url:
            logger.error(f"Failed to generate presigned URL for {filename}")
            return None, None, None, "Failed to generate upload URL"

        logger.info(f"Created presigned upload: key={object_key}, content_type={content_type}")

        return upload_url, object_key, r2.public_url(object_key), None
