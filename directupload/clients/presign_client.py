"""
Authorization client: requests presigned upload URLs from the backend.

Single attempt per call. Any transport error, non-2xx status or
malformed grant surfaces as AuthorizationFailed; nothing is retried.
"""
import logging
import time
from typing import Optional

import httpx
from pydantic import ValidationError

from directupload.config import Settings, settings as default_settings
from directupload.errors import AuthorizationFailed
from directupload.schemas.upload import PresignRequest, PresignResponse
from directupload.utils.logging import log_presign_request, log_presign_failure
from directupload.utils.metrics import presign_requests_total

logger = logging.getLogger(__name__)


class PresignClient:
    """
    Client for the backend presign endpoint.

    Uses an injected httpx.AsyncClient when given (tests, shared pools);
    otherwise owns one configured with the backend base URL and the
    Bearer token. Use as an async context manager to close an owned client.
    """

    def __init__(
        self,
        http_client: Optional[httpx.AsyncClient] = None,
        settings: Optional[Settings] = None
    ):
        self.settings = settings or default_settings
        self._owns_client = http_client is None
        if http_client is None:
            http_client = httpx.AsyncClient(
                base_url=self.settings.api_base_url,
                timeout=httpx.Timeout(self.settings.http_timeout),
            )
        self._client = http_client

    def _headers(self) -> dict[str, str]:
        if self.settings.access_token:
            return {"Authorization": f"Bearer {self.settings.access_token}"}
        return {}

    async def request_authorization(self, filename: str, content_type: str) -> PresignResponse:
        """
        Request an upload grant for a file.

        Args:
            filename: Name the object should be stored under
            content_type: MIME type the PUT will declare

        Returns:
            PresignResponse with the upload URL and storage key

        Raises:
            AuthorizationFailed: On transport error, non-2xx status or bad grant
        """
        try:
            payload = PresignRequest(filename=filename, content_type=content_type)
        except ValidationError as e:
            presign_requests_total.labels(status="invalid").inc()
            log_presign_failure(logger, filename, f"invalid request: {e}")
            raise AuthorizationFailed("Presign request needs a file name and content type") from e

        start = time.perf_counter()

        try:
            response = await self._client.post(
                self.settings.presign_url,
                json=payload.model_dump(),
                headers=self._headers(),
            )
        except httpx.HTTPError as e:
            duration_ms = (time.perf_counter() - start) * 1000
            presign_requests_total.labels(status="error").inc()
            log_presign_failure(logger, filename, str(e), duration_ms=duration_ms)
            raise AuthorizationFailed(f"Presign request failed: {e}") from e

        duration_ms = (time.perf_counter() - start) * 1000

        if not response.is_success:
            presign_requests_total.labels(status="rejected").inc()
            log_presign_failure(
                logger,
                filename,
                response.reason_phrase,
                status_code=response.status_code,
                duration_ms=duration_ms
            )
            raise AuthorizationFailed(
                f"Presign request rejected: {response.status_code} {response.reason_phrase}",
                status_code=response.status_code
            )

        try:
            grant = PresignResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            presign_requests_total.labels(status="invalid").inc()
            log_presign_failure(
                logger,
                filename,
                f"invalid grant: {e}",
                status_code=response.status_code,
                duration_ms=duration_ms
            )
            raise AuthorizationFailed(
                "Presign response is not a valid upload grant",
                status_code=response.status_code
            ) from e

        presign_requests_total.labels(status="ok").inc()
        log_presign_request(
            logger,
            filename,
            content_type,
            duration_ms=duration_ms,
            status_code=response.status_code,
            key=grant.key
        )
        return grant

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "PresignClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
