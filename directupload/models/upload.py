"""
Upload data model.

LocalFile is the blob handed to the pipeline. UploadState tracks one
request through the upload state machine:

    idle -> validating -> requesting_authorization -> transferring -> succeeded
                 |                  |                      |
                 +------------------+----------------------+--> failed

BatchUploadState is the ordered list of per-file outcomes of a batch.
"""
import asyncio
import enum
import mimetypes
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Optional, Union

from directupload.errors import InvalidTransition, LocalReadFailed, UploadError


class UploadPhase(str, enum.Enum):
    """Phase of a single upload request."""
    IDLE = "idle"
    VALIDATING = "validating"
    REQUESTING_AUTHORIZATION = "requesting_authorization"
    TRANSFERRING = "transferring"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


TERMINAL_PHASES = frozenset({UploadPhase.SUCCEEDED, UploadPhase.FAILED})

ALLOWED_TRANSITIONS = {
    UploadPhase.IDLE: {UploadPhase.VALIDATING},
    UploadPhase.VALIDATING: {UploadPhase.REQUESTING_AUTHORIZATION, UploadPhase.FAILED},
    UploadPhase.REQUESTING_AUTHORIZATION: {UploadPhase.TRANSFERRING, UploadPhase.FAILED},
    UploadPhase.TRANSFERRING: {UploadPhase.SUCCEEDED, UploadPhase.FAILED},
    UploadPhase.SUCCEEDED: set(),
    UploadPhase.FAILED: set(),
}


@dataclass(frozen=True)
class LocalFile:
    """
    A file chosen for upload.

    Bytes live either in memory (content) or on disk (path, read lazily).

    Attributes:
        name: File name as the user chose it
        size_bytes: Size in bytes
        mime_type: MIME type (empty string when unknown)
        content: In-memory bytes, if any
        path: Filesystem path, if the file is disk-backed
    """
    name: str
    size_bytes: int
    mime_type: str
    content: Optional[bytes] = field(default=None, repr=False)
    path: Optional[Path] = None

    @classmethod
    def from_bytes(cls, name: str, content: bytes, mime_type: str) -> "LocalFile":
        return cls(name=name, size_bytes=len(content), mime_type=mime_type, content=content)

    @classmethod
    def from_path(cls, path: Union[str, Path], mime_type: Optional[str] = None) -> "LocalFile":
        """
        Describe a file on disk without reading it.

        Args:
            path: Path to the file
            mime_type: MIME type; guessed from the extension when omitted

        Raises:
            LocalReadFailed: If the file cannot be stat'ed
        """
        path = Path(path)
        try:
            size = path.stat().st_size
        except OSError as e:
            raise LocalReadFailed(f"Cannot read {path}: {e}") from e
        if mime_type is None:
            mime_type = mimetypes.guess_type(path.name)[0] or ""
        return cls(name=path.name, size_bytes=size, mime_type=mime_type, path=path)

    async def read(self) -> bytes:
        """Read the file bytes without blocking the event loop."""
        if self.content is not None:
            return self.content
        if self.path is None:
            raise LocalReadFailed(f"File {self.name} has no content")
        try:
            return await asyncio.to_thread(self.path.read_bytes)
        except OSError as e:
            raise LocalReadFailed(f"Cannot read {self.path}: {e}") from e


@dataclass(frozen=True)
class UploadRequest:
    """A file submitted for upload, with an optional explicit target name."""
    file: LocalFile
    target_name: Optional[str] = None

    @property
    def filename(self) -> str:
        return self.target_name or self.file.name


@dataclass
class UploadState:
    """
    State of one upload request.

    Only the orchestrator run handling the request mutates it, and only
    through advance(), succeed() and fail().
    """
    phase: UploadPhase = UploadPhase.IDLE
    progress_percent: int = 0
    result_key: Optional[str] = None
    error_message: Optional[str] = None
    error: Optional[UploadError] = field(default=None, repr=False)

    @property
    def is_terminal(self) -> bool:
        return self.phase in TERMINAL_PHASES

    @property
    def in_flight(self) -> bool:
        return self.phase in (UploadPhase.REQUESTING_AUTHORIZATION, UploadPhase.TRANSFERRING)

    def advance(self, phase: UploadPhase) -> None:
        if phase not in ALLOWED_TRANSITIONS[self.phase]:
            raise InvalidTransition(f"Cannot move upload from {self.phase.value} to {phase.value}")
        self.phase = phase

    def succeed(self, storage_reference: str) -> None:
        self.advance(UploadPhase.SUCCEEDED)
        self.progress_percent = 100
        self.result_key = storage_reference
        self.error_message = None
        self.error = None

    def fail(self, error: UploadError, message: str) -> None:
        self.advance(UploadPhase.FAILED)
        # No partial-progress retention on failure
        self.progress_percent = 0
        self.result_key = None
        self.error_message = message
        self.error = error

    def snapshot(self) -> "UploadState":
        """Copy handed to observers so they cannot mutate the live state."""
        return replace(self)


@dataclass(frozen=True)
class FileOutcome:
    """Terminal outcome of one file in a batch."""
    index: int
    filename: str
    storage_reference: Optional[str] = None
    error_message: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.storage_reference is not None


@dataclass
class BatchUploadState:
    """Per-file outcomes of a batch, in submission order."""
    outcomes: list[FileOutcome] = field(default_factory=list)

    @property
    def references(self) -> list[str]:
        return [o.storage_reference for o in self.outcomes if o.succeeded]

    @property
    def failures(self) -> list[FileOutcome]:
        return [o for o in self.outcomes if not o.succeeded]

    @property
    def all_succeeded(self) -> bool:
        return not self.failures
