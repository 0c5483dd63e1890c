"""
Localized user-facing upload messages.
"""
from typing import Optional

from directupload.config import settings
from directupload.errors import (
    AuthorizationFailed,
    LocalReadFailed,
    TransferFailed,
    UploadError,
    ValidationRejected,
)

_MESSAGES = {
    "vi": {
        "file_too_large": "File quá lớn. Kích thước tối đa: {max_mb}MB",
        "not_an_image": "Chỉ cho phép upload file ảnh",
        "upload_succeeded": "Upload thành công!",
        "batch_succeeded": "Upload thành công {count} file!",
        "batch_failed": "Upload thất bại {failed}/{total} file",
        "upload_failed": "Upload thất bại",
        "authorization_failed": "Có lỗi xảy ra khi tạo URL upload ảnh",
        "transfer_failed": "Có lỗi xảy ra khi upload ảnh lên S3",
        "read_failed": "Có lỗi khi đọc file ảnh",
    },
    "en": {
        "file_too_large": "File too large. Maximum size: {max_mb}MB",
        "not_an_image": "Only image files can be uploaded",
        "upload_succeeded": "Upload succeeded!",
        "batch_succeeded": "Uploaded {count} files successfully!",
        "batch_failed": "Upload failed for {failed} of {total} files",
        "upload_failed": "Upload failed",
        "authorization_failed": "Could not create the upload URL",
        "transfer_failed": "Could not upload the image to storage",
        "read_failed": "Could not read the image file",
    },
}


def get_message(name: str, language: Optional[str] = None, **params) -> str:
    """
    Get a localized message.

    Falls back to Vietnamese for unknown languages.

    Args:
        name: Message identifier
        language: 'vi' or 'en' (default from settings)
        **params: Format parameters

    Returns:
        Formatted message
    """
    catalog = _MESSAGES.get(language or settings.notification_language, _MESSAGES["vi"])
    return catalog[name].format(**params)


def error_message_for(error: BaseException, language: Optional[str] = None) -> str:
    """Normalize any failure to the message shown to the user."""
    if isinstance(error, ValidationRejected):
        return error.message
    if isinstance(error, AuthorizationFailed):
        return get_message("authorization_failed", language)
    if isinstance(error, TransferFailed):
        return get_message("transfer_failed", language)
    if isinstance(error, LocalReadFailed):
        return get_message("read_failed", language)
    if isinstance(error, UploadError):
        return error.message
    return get_message("upload_failed", language)
