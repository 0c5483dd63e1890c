"""
Transfer executor: PUTs file bytes straight to a presigned storage URL.

Success is a 2xx status, nothing more: no body inspection, no checksum.
The grant used for a failed transfer is simply dropped; expiry on the
storage side revokes it.
"""
import logging
import time
from typing import Optional

import httpx

from directupload.config import Settings, settings as default_settings
from directupload.errors import TransferFailed
from directupload.models.upload import LocalFile
from directupload.utils.logging import log_transfer_failure
from directupload.utils.metrics import transfers_total, upload_bytes_total

logger = logging.getLogger(__name__)


class StorageClient:
    """
    Direct-to-storage uploader.

    Never sends the backend Authorization header: the presigned URL is
    the only credential the storage endpoint sees.
    """

    def __init__(
        self,
        http_client: Optional[httpx.AsyncClient] = None,
        settings: Optional[Settings] = None
    ):
        self.settings = settings or default_settings
        self._owns_client = http_client is None
        if http_client is None:
            http_client = httpx.AsyncClient(timeout=httpx.Timeout(self.settings.http_timeout))
        self._client = http_client

    async def transfer(self, upload_url: str, file: LocalFile, content_type: str) -> None:
        """
        Upload the full file body to a presigned URL.

        Args:
            upload_url: Presigned PUT URL
            file: File to upload
            content_type: Content-Type header; must match what was signed

        Raises:
            TransferFailed: On transport error or non-2xx status
            LocalReadFailed: If the file bytes cannot be read
        """
        body = await file.read()
        start = time.perf_counter()

        try:
            response = await self._client.put(
                upload_url,
                content=body,
                headers={"Content-Type": content_type},
            )
        except httpx.HTTPError as e:
            transfers_total.labels(status="error").inc()
            log_transfer_failure(
                logger,
                file.name,
                str(e),
                duration_ms=(time.perf_counter() - start) * 1000
            )
            raise TransferFailed(f"Upload failed: {e}") from e

        if not response.is_success:
            transfers_total.labels(status="rejected").inc()
            log_transfer_failure(
                logger,
                file.name,
                response.reason_phrase,
                status_code=response.status_code,
                duration_ms=(time.perf_counter() - start) * 1000
            )
            raise TransferFailed(
                f"Upload failed: {response.reason_phrase}",
                status_code=response.status_code,
                reason=response.reason_phrase
            )

        transfers_total.labels(status="ok").inc()
        upload_bytes_total.inc(len(body))
        logger.debug(f"Transferred {len(body)} bytes for {file.name}")

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "StorageClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
