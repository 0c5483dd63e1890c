"""
Local preview generation: renders a file as a data URI.

Independent of the network path; callers run it concurrently with the
upload and never wait on it before authorizing.
"""
import base64

from directupload.models.upload import LocalFile


async def generate_preview(file: LocalFile) -> str:
    """
    Read a file and encode it as a data URI.

    Raises:
        LocalReadFailed: If the file cannot be read
    """
    data = await file.read()
    mime_type = file.mime_type or "application/octet-stream"
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"
