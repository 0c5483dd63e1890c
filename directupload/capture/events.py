"""
Input events fed to the capture adapters.

Minimal models of a file-picker change and a clipboard paste, as
delivered by whatever UI layer hosts the upload surface.
"""
from dataclasses import dataclass, field
from typing import Optional, Sequence

from directupload.models.upload import LocalFile


@dataclass
class FileSelectionEvent:
    """Files chosen in a file picker (possibly none)."""
    files: Sequence[LocalFile] = ()


@dataclass
class ClipboardItem:
    """
    One clipboard entry.

    Attributes:
        kind: "file" or "string"
        type: MIME type of the entry
        file: The file behind a "file" entry, if the platform can produce it
    """
    kind: str
    type: str
    file: Optional[LocalFile] = None

    def get_as_file(self) -> Optional[LocalFile]:
        if self.kind != "file":
            return None
        return self.file


@dataclass
class ClipboardEvent:
    """A paste event. prevent_default() stops the host inserting the raw content."""
    items: Sequence[ClipboardItem] = ()
    default_prevented: bool = field(default=False, init=False)

    def prevent_default(self) -> None:
        self.default_prevented = True
