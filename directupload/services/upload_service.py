"""
Upload orchestration.

Sequences validation -> presign (authorization) -> direct PUT for one
file, or fans that sequence out over many files.

Flow per request:
1. Validate size and type locally (no network)
2. Request a presigned URL and storage key from the backend
3. PUT the bytes directly to storage with the signed Content-Type
4. Report the storage reference (or a normalized error message)

There is exactly one attempt per request. Failures are caught here,
turned into a user-facing message, reported through on_error and the
notifier, and never re-raised to the caller.
"""
import asyncio
import logging
import time
import uuid
from typing import Callable, Iterable, Optional

from directupload.clients.presign_client import PresignClient
from directupload.clients.storage_client import StorageClient
from directupload.config import Settings, settings as default_settings
from directupload.errors import InvalidTransition, UploadError, ValidationRejected
from directupload.models.upload import (
    BatchUploadState,
    FileOutcome,
    LocalFile,
    UploadPhase,
    UploadRequest,
    UploadState,
)
from directupload.services.messages import error_message_for, get_message
from directupload.services.notifications import LoggingNotifier, Notifier
from directupload.services.validation import check_file
from directupload.utils.logging import log_upload_started, log_upload_succeeded, log_upload_failed
from directupload.utils.metrics import uploads_total, upload_duration_seconds

logger = logging.getLogger(__name__)

StateListener = Callable[[UploadState], None]


def _timestamp_ms() -> int:
    return int(time.time() * 1000)


class UploadOrchestrator:
    """
    Upload state owner for one upload surface (e.g. one form field).

    Exposes is_uploading and upload_progress read-only; both change only
    through the transitions below. Observers registered with subscribe()
    receive a snapshot of the request state on every transition.
    """

    def __init__(
        self,
        presign_client: Optional[PresignClient] = None,
        storage_client: Optional[StorageClient] = None,
        notifier: Optional[Notifier] = None,
        on_success: Optional[Callable[[str], None]] = None,
        on_error: Optional[Callable[[str], None]] = None,
        settings: Optional[Settings] = None
    ):
        self.settings = settings or default_settings
        self.presign_client = presign_client or PresignClient(settings=self.settings)
        self.storage_client = storage_client or StorageClient(settings=self.settings)
        self.notifier = notifier or LoggingNotifier()
        self.on_success = on_success
        self.on_error = on_error

        self._is_uploading = False
        self._upload_progress = 0
        self._last_error: Optional[str] = None
        self._listeners: list[StateListener] = []

    @property
    def is_uploading(self) -> bool:
        return self._is_uploading

    @property
    def upload_progress(self) -> int:
        return self._upload_progress

    @property
    def last_error(self) -> Optional[str]:
        return self._last_error

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """
        Observe request state transitions.

        Returns:
            Function that removes the listener
        """
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def _publish(self, state: UploadState) -> None:
        snapshot = state.snapshot()
        for listener in list(self._listeners):
            listener(snapshot)

    def _advance(self, state: UploadState, phase: UploadPhase) -> None:
        state.advance(phase)
        self._publish(state)

    def validate_file(self, file: LocalFile, max_size_bytes: Optional[int] = None) -> bool:
        """
        Check a file before upload, notifying the user on rejection.

        Args:
            file: Candidate file
            max_size_bytes: Size limit (default from settings, 5MB)

        Returns:
            True if the file may be uploaded
        """
        try:
            check_file(
                file,
                max_size_bytes if max_size_bytes is not None else self.settings.max_upload_size_bytes,
                self.settings.allowed_mime_prefix,
                self.settings.notification_language
            )
        except ValidationRejected as e:
            self.notifier.error(e.message)
            return False
        return True

    async def run(self, request: UploadRequest, validate: bool = True) -> UploadState:
        """
        Drive one request through the state machine to a terminal state.

        Quiet: no callbacks and no notifications; callers decide how to
        report the returned state.

        Args:
            request: File and target name
            validate: Run the validation gate (False only for the legacy batch path)

        Returns:
            Terminal UploadState (succeeded or failed)
        """
        state = UploadState()
        upload_id = uuid.uuid4().hex[:12]
        file = request.file
        start = time.perf_counter()

        log_upload_started(
            logger,
            upload_id=upload_id,
            filename=request.filename,
            size_bytes=file.size_bytes,
            content_type=file.mime_type
        )

        try:
            self._advance(state, UploadPhase.VALIDATING)
            if validate:
                check_file(
                    file,
                    self.settings.max_upload_size_bytes,
                    self.settings.allowed_mime_prefix,
                    self.settings.notification_language
                )

            self._advance(state, UploadPhase.REQUESTING_AUTHORIZATION)
            grant = await self.presign_client.request_authorization(request.filename, file.mime_type)

            self._advance(state, UploadPhase.TRANSFERRING)
            await self.storage_client.transfer(grant.url, file, file.mime_type)

            state.succeed(grant.storage_reference)
        except InvalidTransition:
            raise
        except UploadError as e:
            state.fail(e, error_message_for(e, self.settings.notification_language))
        except Exception as e:
            state.fail(UploadError(str(e)), error_message_for(e, self.settings.notification_language))
            # Logged here so the traceback is still available
            self._finish(state, upload_id, request, start, error_type=type(e).__name__, include_traceback=True)
            return state

        self._finish(state, upload_id, request, start)
        return state

    def _finish(
        self,
        state: UploadState,
        upload_id: str,
        request: UploadRequest,
        start: float,
        error_type: Optional[str] = None,
        include_traceback: bool = False
    ) -> None:
        """Record metrics, log the outcome and publish the terminal state."""
        duration = time.perf_counter() - start
        upload_duration_seconds.observe(duration)
        uploads_total.labels(outcome=state.phase.value).inc()

        if state.phase is UploadPhase.SUCCEEDED:
            log_upload_succeeded(
                logger,
                upload_id=upload_id,
                filename=request.filename,
                storage_reference=state.result_key,
                duration_ms=duration * 1000
            )
        else:
            log_upload_failed(
                logger,
                upload_id=upload_id,
                filename=request.filename,
                error=state.error.message,
                error_type=error_type or type(state.error).__name__,
                duration_ms=duration * 1000,
                include_traceback=include_traceback
            )

        self._publish(state)

    async def upload_file(self, file: LocalFile, file_name: Optional[str] = None) -> Optional[str]:
        """
        Upload one file and report the outcome.

        Args:
            file: File to upload
            file_name: Target name (default "{epoch_ms}_{file.name}")

        Returns:
            Storage reference on success, None on failure
        """
        self._is_uploading = True
        self._upload_progress = 0

        try:
            request = UploadRequest(file=file, target_name=file_name or f"{_timestamp_ms()}_{file.name}")
            state = await self.run(request)

            message = state.error_message
            if state.phase is UploadPhase.SUCCEEDED:
                self._upload_progress = 100
                try:
                    if self.on_success:
                        self.on_success(state.result_key)
                    self.notifier.success(get_message("upload_succeeded", self.settings.notification_language))
                except Exception as e:
                    logger.exception(f"Success handler failed for {request.filename}")
                    message = error_message_for(e, self.settings.notification_language)
                else:
                    self._last_error = None
                    return state.result_key

            self._last_error = message
            if self.on_error:
                self.on_error(message)
            self.notifier.error(message)
            return None
        finally:
            self._is_uploading = False
            self._upload_progress = 0

    async def upload_batch(self, files: Iterable[LocalFile]) -> BatchUploadState:
        """
        Upload many files concurrently, keeping each file's outcome.

        Each file runs its own state machine; results are collected here
        in submission order. One notification covers the whole batch.

        Args:
            files: Files to upload

        Returns:
            BatchUploadState with one FileOutcome per file
        """
        files = list(files)
        self._is_uploading = True
        self._upload_progress = 0

        try:
            stamp = _timestamp_ms()
            requests = [
                UploadRequest(file=file, target_name=f"{stamp}_{index}_{file.name}")
                for index, file in enumerate(files)
            ]
            states = await asyncio.gather(
                *(self.run(request, validate=self.settings.validate_batch_uploads) for request in requests)
            )

            batch = BatchUploadState()
            for index, (request, state) in enumerate(zip(requests, states)):
                batch.outcomes.append(FileOutcome(
                    index=index,
                    filename=request.filename,
                    storage_reference=state.result_key,
                    error_message=state.error_message
                ))

            if batch.all_succeeded:
                self._last_error = None
                self._upload_progress = 100
                self.notifier.success(
                    get_message("batch_succeeded", self.settings.notification_language, count=len(files))
                )
            else:
                message = get_message(
                    "batch_failed",
                    self.settings.notification_language,
                    failed=len(batch.failures),
                    total=len(files)
                )
                self._last_error = message
                if self.on_error:
                    self.on_error(message)
                self.notifier.error(message)

            return batch
        finally:
            self._is_uploading = False
            self._upload_progress = 0

    async def upload_multiple_files(self, files: Iterable[LocalFile]) -> list[str]:
        """
        Upload many files; all-or-nothing result.

        Returns:
            Every storage reference in submission order, or [] if any file failed
        """
        batch = await self.upload_batch(files)
        return batch.references if batch.all_succeeded else []

    async def aclose(self) -> None:
        await self.presign_client.aclose()
        await self.storage_client.aclose()

    async def __aenter__(self) -> "UploadOrchestrator":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
