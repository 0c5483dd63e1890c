"""
Capture layer: turns picker selections and clipboard pastes into uploads.
"""
from directupload.capture.adapters import first_selected_file, take_pasted_image
from directupload.capture.events import ClipboardEvent, ClipboardItem, FileSelectionEvent
from directupload.capture.image_field import ImageField
from directupload.capture.thumbnail import ThumbnailUploader

__all__ = [
    "ClipboardEvent",
    "ClipboardItem",
    "FileSelectionEvent",
    "ImageField",
    "ThumbnailUploader",
    "first_selected_file",
    "take_pasted_image",
]
