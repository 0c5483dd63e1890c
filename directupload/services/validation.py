"""
Client-side upload validation.

Pure checks on file metadata; no I/O. Runs before any network call.
"""
import math
from typing import Optional

from directupload.config import settings
from directupload.errors import ValidationRejected
from directupload.models.upload import LocalFile
from directupload.services.messages import get_message

DEFAULT_MAX_SIZE_BYTES = 5 * 1024 * 1024


def check_file(
    file: LocalFile,
    max_size_bytes: int = DEFAULT_MAX_SIZE_BYTES,
    allowed_prefix: str = "image/",
    language: Optional[str] = None
) -> None:
    """
    Check a file against the size limit and the allowed type class.

    Args:
        file: Candidate file
        max_size_bytes: Maximum size in bytes (inclusive)
        allowed_prefix: Required MIME type prefix
        language: Message language (default from settings)

    Raises:
        ValidationRejected: With a user-facing message
    """
    if file.size_bytes > max_size_bytes:
        # Halves round up
        max_mb = math.floor(max_size_bytes / 1024 / 1024 + 0.5)
        raise ValidationRejected(get_message("file_too_large", language, max_mb=max_mb))

    if not file.mime_type.startswith(allowed_prefix):
        raise ValidationRejected(get_message("not_an_image", language))


def is_valid_file(
    file: LocalFile,
    max_size_bytes: Optional[int] = None,
    allowed_prefix: Optional[str] = None
) -> bool:
    """Boolean form of check_file using configured defaults."""
    try:
        check_file(
            file,
            max_size_bytes if max_size_bytes is not None else settings.max_upload_size_bytes,
            allowed_prefix if allowed_prefix is not None else settings.allowed_mime_prefix,
        )
    except ValidationRejected:
        return False
    return True
