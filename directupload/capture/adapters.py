"""
Capture adapters: pick the one file an input event should upload.

Both are synchronous. The paste adapter decides, before any await,
whether to consume the event, so prevent_default() lands before the
host handles the paste.
"""
from typing import Optional

from directupload.capture.events import ClipboardEvent, FileSelectionEvent
from directupload.models.upload import LocalFile


def first_selected_file(event: FileSelectionEvent) -> Optional[LocalFile]:
    """First file of a picker selection; None when nothing was chosen."""
    if not event.files:
        return None
    return event.files[0]


def take_pasted_image(
    event: ClipboardEvent,
    busy: bool,
    mime_prefix: str = "image/"
) -> Optional[LocalFile]:
    """
    Claim the first pasted image, if any.

    Ignored entirely while an upload is in flight (no queueing). Only the
    first file item with an image MIME type is considered; scanning stops
    there even if the platform cannot produce the file.

    Args:
        event: Paste event; prevent_default() is called on a match
        busy: Whether the surface is already uploading
        mime_prefix: Accepted MIME type class

    Returns:
        The pasted image file, or None
    """
    if busy:
        return None

    for item in event.items:
        if item.kind == "file" and item.type.startswith(mime_prefix):
            file = item.get_as_file()
            if file is not None:
                event.prevent_default()
            return file

    return None
