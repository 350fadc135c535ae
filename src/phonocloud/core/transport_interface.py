"""
傳輸層抽象基類

核心只需要「發出 GET、之後拿到串流或錯誤」與「取消」兩個能力。
"""

from abc import ABC, abstractmethod
from typing import Any, BinaryIO, Callable, Optional

# 完成回呼：成功時收到可讀串流，網路錯誤時收到 None
CompletionCallback = Callable[[Optional[BinaryIO]], None]


class Transport(ABC):
    """
    非同步 HTTP 傳輸

    約定:
    - issue_get() 立即回傳 handle，稍後在事件迴圈上呼叫 on_complete
    - cancel() 為盡力而為；已取消的請求可以不再回呼，也可以仍然回呼
    """

    @abstractmethod
    def issue_get(self, url: str, on_complete: CompletionCallback) -> Any:
        pass

    @abstractmethod
    def cancel(self, handle: Any) -> None:
        pass
