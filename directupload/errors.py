"""
Upload pipeline error taxonomy.

Every failure the pipeline can report is an UploadError subclass carrying
a human-readable message. Clients raise them; the orchestrator catches
them at its boundary and normalizes them for callbacks and notifications.
"""
from typing import Optional


class UploadError(Exception):
    """Base class for upload pipeline failures."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationRejected(UploadError):
    """Size or type constraint violated. No network call was made."""


class AuthorizationFailed(UploadError):
    """The backend refused or was unreachable while issuing an upload grant."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class TransferFailed(UploadError):
    """The direct write to storage did not complete successfully."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        reason: Optional[str] = None
    ):
        super().__init__(message)
        self.status_code = status_code
        self.reason = reason


class LocalReadFailed(UploadError):
    """The local file could not be read."""


class InvalidTransition(Exception):
    """An upload state was moved along an edge the state machine forbids."""
