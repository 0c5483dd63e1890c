"""
Cloudflare R2 / S3-compatible storage client for the development presign backend.

Uses boto3 with the S3-compatible API. Works with any S3-compatible
storage. Only signs URLs: the bytes go from the uploader straight to
the bucket, never through this process.
"""
import logging
from typing import Optional
from urllib.parse import quote

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from directupload.config import settings

logger = logging.getLogger(__name__)


class R2Client:
    """
    S3-compatible client for Cloudflare R2.

    Provides presigned PUT URL generation for direct uploads.
    """

    def __init__(self):
        """
        Initialize R2 client with boto3.

        Uses environment variables for configuration.
        Stays unconfigured (is_configured False) if credentials are missing.
        """
        self._client = None
        self._configured = False

        if not all([
            settings.r2_endpoint,
            settings.r2_access_key,
            settings.r2_secret_key
        ]):
            logger.warning(
                "R2 storage not configured. "
                "Set R2_ENDPOINT, R2_ACCESS_KEY, and R2_SECRET_KEY."
            )
            return

        try:
            # Use signature_version='s3v4' for R2 compatibility
            self._client = boto3.client(
                's3',
                endpoint_url=settings.r2_endpoint,
                aws_access_key_id=settings.r2_access_key,
                aws_secret_access_key=settings.r2_secret_key,
                region_name=settings.r2_region,
                config=Config(
                    signature_version='s3v4',
                    s3={'addressing_style': 'path'}  # R2 uses path-style
                )
            )
            self._configured = True
            logger.info(f"R2 client initialized for bucket: {settings.r2_bucket}")

        except BotoCoreError as e:
            logger.error(f"Failed to initialize R2 client: {e}")

    @property
    def is_configured(self) -> bool:
        """Check if R2 client is properly configured."""
        return self._configured and self._client is not None

    @property
    def bucket(self) -> str:
        """Get configured bucket name."""
        return settings.r2_bucket

    def generate_presigned_upload_url(
        self,
        object_key: str,
        content_type: str,
        expiration: Optional[int] = None
    ) -> Optional[str]:
        """
        Generate a presigned PUT URL for direct upload.

        Args:
            object_key: The S3 object key (path in bucket)
            content_type: MIME type the upload must declare
            expiration: URL expiration in seconds (default from settings)

        Returns:
            Presigned URL string, or None if generation fails

        Security:
            - URL expires after specified time
            - Only allows PUT (upload), not GET
            - Content-Type must match what was signed
        """
        if not self.is_configured:
            logger.error("Cannot generate presigned URL: R2 not configured")
            return None

        if expiration is None:
            expiration = settings.r2_presign_expiration

        try:
            url = self._client.generate_presigned_url(
                ClientMethod='put_object',
                Params={
                    'Bucket': self.bucket,
                    'Key': object_key,
                    'ContentType': content_type,
                },
                ExpiresIn=expiration
            )

            logger.debug(f"Generated presigned URL for {object_key}")
            return url

        except (ClientError, BotoCoreError) as e:
            logger.error(f"Failed to generate presigned URL: {e}")
            return None

    def public_url(self, object_key: str) -> Optional[str]:
        """
        Public URL of an object, when the bucket is exposed through a public base URL.

        Returns:
            URL string, or None if no public base URL is configured
        """
        if not settings.r2_public_base_url:
            return None
        return f"{settings.r2_public_base_url.rstrip('/')}/{quote(object_key)}"


# Singleton instance
_r2_client: Optional[R2Client] = None


def get_r2_client() -> R2Client:
    """
    Get the singleton R2 client instance.

    Returns:
        R2Client instance (may or may not be configured)
    """
    global _r2_client
    if _r2_client is None:
        _r2_client = R2Client()
    return _r2_client
