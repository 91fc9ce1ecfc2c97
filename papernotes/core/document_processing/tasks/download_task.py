"""
PDF download task.

Fetches the source PDF over HTTP(S), following redirects, under an
explicit timeout.

Dependencies: httpx
System role: First stage of the notes pipeline
"""

import logging

import httpx

from papernotes.core.exceptions import FetchError

logger = logging.getLogger(__name__)


class DownloadTask:
    """Download a paper's PDF bytes by URL."""

    def __init__(
        self,
        timeout_seconds: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize download task.

        Args:
            timeout_seconds: Upper bound for the whole request
            transport: Optional httpx transport (used by tests to stub responses)
        """
        self._timeout_seconds = timeout_seconds
        self._transport = transport

    async def download(self, source_location: str) -> bytes:
        """
        Download the document at a URL.

        Args:
            source_location: HTTP(S) URL of the PDF

        Returns:
            bytes: Response body

        Raises:
            FetchError: Non-2xx status, transport error, or timeout
        """
        if not source_location:
            raise FetchError("Source location is required")

        try:
            async with httpx.AsyncClient(
                follow_redirects=True,
                timeout=self._timeout_seconds,
                transport=self._transport,
            ) as client:
                response = await client.get(source_location)
        except httpx.TimeoutException as e:
            raise FetchError(
                f"Timed out after {self._timeout_seconds}s fetching document",
                source_location=source_location,
            ) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise FetchError(
                f"Failed to fetch document: {e}",
                source_location=source_location,
            ) from e

        if not response.is_success:
            raise FetchError(
                f"Failed to fetch document: HTTP {response.status_code}",
                source_location=source_location,
                status_code=response.status_code,
            )

        logger.info(
            "Downloaded document",
            extra={"source_location": source_location, "size_bytes": len(response.content)},
        )
        return response.content
