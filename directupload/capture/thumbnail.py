"""
Thumbnail upload surface.

Accepts a thumbnail from a file picker or a clipboard paste, shows a
local preview immediately and uploads through the orchestrator at the
same time. Keeps the resulting presign key for the enclosing form.
"""
import asyncio
import logging
from typing import Optional

from directupload.capture.adapters import first_selected_file, take_pasted_image
from directupload.capture.events import ClipboardEvent, FileSelectionEvent
from directupload.errors import LocalReadFailed
from directupload.models.upload import LocalFile
from directupload.services.messages import get_message
from directupload.services.notifications import Notifier
from directupload.services.preview import generate_preview
from directupload.services.upload_service import UploadOrchestrator

logger = logging.getLogger(__name__)


class ThumbnailUploader:
    """
    State for one thumbnail field.

    Attributes:
        thumbnail_preview: data URI of the chosen file ("" when none)
        thumbnail_file: The chosen file
        presign_key: Storage key of the uploaded thumbnail ("" until success)
        is_uploading: In-flight flag; pastes are ignored while set
    """

    def __init__(self, orchestrator: UploadOrchestrator, notifier: Optional[Notifier] = None):
        self.orchestrator = orchestrator
        self.notifier = notifier or orchestrator.notifier

        self.thumbnail_preview = ""
        self.thumbnail_file: Optional[LocalFile] = None
        self.presign_key = ""
        self.is_uploading = False

        # Bumped on every new file and on removal; stale results are dropped
        self._attempt = 0
        self._aborted_attempt: Optional[int] = None

    async def process_file(self, file: LocalFile) -> None:
        """
        Preview and upload a file concurrently.

        A preview read failure aborts the attempt: all field state is
        cleared and the upload result, whenever it arrives, is ignored.
        """
        self._attempt += 1
        attempt = self._attempt

        self.thumbnail_file = file
        self.is_uploading = True

        try:
            await asyncio.gather(
                self._load_preview(file, attempt),
                self._upload(file, attempt),
            )
        finally:
            if attempt == self._attempt:
                self.is_uploading = False

    async def _load_preview(self, file: LocalFile, attempt: int) -> None:
        try:
            preview = await generate_preview(file)
        except LocalReadFailed as e:
            logger.warning(f"Preview read failed for {file.name}: {e.message}")
            if attempt != self._attempt:
                return
            self._aborted_attempt = attempt
            self.notifier.error(get_message("read_failed", self.orchestrator.settings.notification_language))
            self.thumbnail_file = None
            self.thumbnail_preview = ""
            self.presign_key = ""
            self.is_uploading = False
            return

        if attempt == self._attempt and self._aborted_attempt != attempt:
            self.thumbnail_preview = preview

    async def _upload(self, file: LocalFile, attempt: int) -> None:
        key = await self.orchestrator.upload_file(file, file.name)
        if attempt != self._attempt or self._aborted_attempt == attempt:
            return
        self.presign_key = key or ""

    async def handle_thumbnail_change(self, event: FileSelectionEvent) -> None:
        file = first_selected_file(event)
        if file is not None:
            await self.process_file(file)

    async def handle_thumbnail_paste(self, event: ClipboardEvent) -> None:
        file = take_pasted_image(event, busy=self.is_uploading)
        if file is not None:
            await self.process_file(file)

    def handle_remove_thumbnail(self) -> None:
        self._attempt += 1
        self.thumbnail_file = None
        self.thumbnail_preview = ""
        self.presign_key = ""
        self.is_uploading = False
