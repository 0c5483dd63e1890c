"""
directupload: direct-to-storage upload pipeline.

Two phases per file: request a presigned URL from the backend, then PUT
the bytes straight to object storage.
"""
from directupload.errors import (
    AuthorizationFailed,
    LocalReadFailed,
    TransferFailed,
    UploadError,
    ValidationRejected,
)
from directupload.models.upload import BatchUploadState, LocalFile, UploadPhase, UploadState
from directupload.services.upload_service import UploadOrchestrator

__version__ = "0.1.0"

__all__ = [
    "AuthorizationFailed",
    "BatchUploadState",
    "LocalFile",
    "LocalReadFailed",
    "TransferFailed",
    "UploadError",
    "UploadOrchestrator",
    "UploadPhase",
    "UploadState",
    "ValidationRejected",
]
