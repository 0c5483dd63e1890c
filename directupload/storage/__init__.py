"""
Storage module for S3-compatible object storage (Cloudflare R2).

Backs the development presign backend. The backend NEVER receives file
bytes - uploaders PUT directly to R2 with presigned URLs.
"""
from directupload.storage.r2_client import get_r2_client, R2Client
from directupload.storage.presign import PresignService

__all__ = ["get_r2_client", "R2Client", "PresignService"]
