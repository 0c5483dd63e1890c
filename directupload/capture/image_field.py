"""
Single-image form field.

Validates the picked file before anything starts, previews it locally
while uploading, then swaps the preview for the stored reference.
"""
import asyncio
import logging
from typing import Callable, Optional

from directupload.capture.adapters import first_selected_file
from directupload.capture.events import FileSelectionEvent
from directupload.errors import LocalReadFailed
from directupload.models.upload import LocalFile
from directupload.services.preview import generate_preview
from directupload.services.upload_service import UploadOrchestrator

logger = logging.getLogger(__name__)


class ImageField:
    """Image input bound to one orchestrator."""

    def __init__(
        self,
        orchestrator: UploadOrchestrator,
        value: str = "",
        on_change: Optional[Callable[[str], None]] = None,
        on_remove: Optional[Callable[[], None]] = None,
        disabled: bool = False
    ):
        self.orchestrator = orchestrator
        self.value = value
        self.preview = value
        self.on_change = on_change
        self.on_remove = on_remove
        self.disabled = disabled
        self.is_uploading = False

    async def _show_preview(self, file: LocalFile) -> None:
        try:
            self.preview = await generate_preview(file)
        except LocalReadFailed as e:
            logger.warning(f"Preview read failed for {file.name}: {e.message}")

    async def handle_file_change(self, event: FileSelectionEvent) -> Optional[str]:
        """
        Upload the picked image.

        Returns:
            Stored reference, or None if nothing was picked, the file was
            rejected or the upload failed
        """
        file = first_selected_file(event)
        if file is None or self.disabled or self.is_uploading:
            return None

        if not self.orchestrator.validate_file(file):
            return None

        self.is_uploading = True
        try:
            _, reference = await asyncio.gather(
                self._show_preview(file),
                self.orchestrator.upload_file(file),
            )
        finally:
            self.is_uploading = False

        if reference:
            self.value = reference
            self.preview = reference
            if self.on_change:
                self.on_change(reference)
        return reference

    def handle_remove(self) -> None:
        self.value = ""
        self.preview = ""
        if self.on_change:
            self.on_change("")
        if self.on_remove:
            self.on_remove()
