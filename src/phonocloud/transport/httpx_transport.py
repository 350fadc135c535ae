"""
httpx 非同步傳輸

每個 GET 是事件迴圈上的一個 asyncio.Task；取消即取消 Task，
被取消的請求不會回呼。HTTP 錯誤（含非 2xx 狀態）以 None 串流回呼，
由解析器轉為 NETWORK_ERROR。
"""

import asyncio
import io
from typing import Any, Optional

import httpx

from phonocloud.config import CloudConfig
from phonocloud.core.transport_interface import CompletionCallback, Transport
from phonocloud.utils.logger import get_logger

logger = get_logger("cloud.transport")


class HttpxTransport(Transport):
    """
    以 httpx.AsyncClient 實作的傳輸層

    Args:
        client: 外部提供的 AsyncClient（不會被 aclose 關閉）
        timeout: 自建 client 的逾時秒數
        loop: 建立 Task 用的事件迴圈，預設為執行中的迴圈
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        *,
        timeout: float = 10.0,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ):
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout, follow_redirects=True)
        self._loop = loop

    @classmethod
    def from_config(
        cls,
        config: CloudConfig,
        *,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ) -> "HttpxTransport":
        """以 config.request_timeout 建立自有 client 的傳輸層"""
        return cls(timeout=config.request_timeout, loop=loop)

    @property
    def timeout(self) -> httpx.Timeout:
        return self._client.timeout

    def issue_get(self, url: str, on_complete: CompletionCallback) -> asyncio.Task:
        loop = self._loop or asyncio.get_running_loop()
        task = loop.create_task(self._fetch(url))
        task.add_done_callback(lambda finished: self._deliver(finished, on_complete))
        return task

    def cancel(self, handle: Any) -> None:
        if not handle.done():
            handle.cancel()

    async def _fetch(self, url: str) -> Optional[bytes]:
        try:
            response = await self._client.get(url)
            response.raise_for_status()
            return response.content
        except httpx.HTTPStatusError as e:
            logger.warning(f"HTTP error from cloud vendor: {e.response.status_code} ({url})")
            return None
        except httpx.HTTPError as e:
            logger.warning(f"Cloud request failed: {e!r} ({url})")
            return None

    @staticmethod
    def _deliver(task: asyncio.Task, on_complete: CompletionCallback) -> None:
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            # 例如 httpx.InvalidURL，不在 HTTPError 體系內
            logger.warning(f"Cloud request raised unexpectedly: {error!r}")
            on_complete(None)
            return
        data = task.result()
        on_complete(io.BytesIO(data) if data is not None else None)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
