from directupload.models.upload import (
    BatchUploadState,
    FileOutcome,
    LocalFile,
    UploadPhase,
    UploadRequest,
    UploadState,
)

__all__ = [
    "BatchUploadState",
    "FileOutcome",
    "LocalFile",
    "UploadPhase",
    "UploadRequest",
    "UploadState",
]
