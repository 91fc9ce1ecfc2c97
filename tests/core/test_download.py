"""
Tests for DownloadTask.

Uses httpx.MockTransport to stub the source server.
"""

import httpx
import pytest

from papernotes.core.document_processing.tasks.download_task import DownloadTask
from papernotes.core.exceptions import FetchError

PAPER_URL = "https://arxiv.org/pdf/1706.03762.pdf"


def _task(handler) -> DownloadTask:
    return DownloadTask(timeout_seconds=5.0, transport=httpx.MockTransport(handler))


class TestDownloadTask:
    """Test HTTP fetch behavior."""

    @pytest.mark.asyncio
    async def test_returns_body_on_success(self) -> None:
        task = _task(lambda request: httpx.Response(200, content=b"%PDF-1.7 body"))

        assert await task.download(PAPER_URL) == b"%PDF-1.7 body"

    @pytest.mark.asyncio
    async def test_follows_redirects(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/abs/1706.03762":
                return httpx.Response(302, headers={"Location": PAPER_URL})
            return httpx.Response(200, content=b"%PDF redirected")

        task = _task(handler)

        assert await task.download("https://arxiv.org/abs/1706.03762") == b"%PDF redirected"

    @pytest.mark.asyncio
    async def test_non_2xx_raises_with_status(self) -> None:
        task = _task(lambda request: httpx.Response(404))

        with pytest.raises(FetchError) as exc_info:
            await task.download(PAPER_URL)

        assert exc_info.value.status_code == 404
        assert exc_info.value.source_location == PAPER_URL

    @pytest.mark.asyncio
    async def test_server_error_raises(self) -> None:
        task = _task(lambda request: httpx.Response(503))

        with pytest.raises(FetchError) as exc_info:
            await task.download(PAPER_URL)

        assert exc_info.value.details["status_code"] == 503

    @pytest.mark.asyncio
    async def test_transport_error_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(FetchError) as exc_info:
            await _task(handler).download(PAPER_URL)

        assert exc_info.value.status_code is None
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_timeout_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(FetchError, match="Timed out"):
            await _task(handler).download(PAPER_URL)

    @pytest.mark.asyncio
    async def test_empty_location_raises(self) -> None:
        with pytest.raises(FetchError):
            await DownloadTask().download("")
