"""
請求排程器（防抖 + 單一在途請求）

所有回呼都在同一個事件迴圈上執行，因此不需要鎖；
正確性完全取決於「最新者勝、過期者偵測後丟棄」：

- 計時器：只有最近一次 schedule() 所設的計時器可以真正發出請求。
  即使底層計時器取消失敗而仍被觸發，也會因身分比對不符而成為 no-op。
- 請求：同一時間只有一個「在途」請求；新的週期開始時，舊請求的取消只是
  盡力而為，真正的保證是完成回呼時的身分比對。

狀態機（每個週期）:
    IDLE -> DEBOUNCING -> IN_FLIGHT -> {RESOLVED | SUPERSEDED | ERRORED}
"""

import asyncio
from enum import Enum
from typing import Any, BinaryIO, Callable, Optional

from phonocloud.core.events import CloudEvent, CloudEventHandler
from phonocloud.core.transport_interface import Transport
from phonocloud.utils.logger import get_logger


class FetchState(Enum):
    IDLE = "idle"
    DEBOUNCING = "debouncing"
    IN_FLIGHT = "in_flight"
    RESOLVED = "resolved"
    SUPERSEDED = "superseded"
    ERRORED = "errored"


class PendingTimer:
    """已設定的防抖計時器；物件本身就是身分"""

    __slots__ = ("spelling", "handle")

    def __init__(self, spelling: str):
        self.spelling = spelling
        self.handle: Any = None

    def __repr__(self) -> str:
        return f"PendingTimer({self.spelling!r})"


class InFlightRequest:
    """在途請求；物件本身就是身分，handle 由傳輸層提供"""

    __slots__ = ("spelling", "url", "handle")

    def __init__(self, spelling: str, url: str):
        self.spelling = spelling
        self.url = url
        self.handle: Any = None

    def __repr__(self) -> str:
        return f"InFlightRequest({self.spelling!r})"


class RequestScheduler:
    """
    防抖與單一在途請求

    Args:
        transport: 傳輸層
        url_builder: 拼音 -> URL
        on_response: 目前在途請求完成時呼叫 (spelling, stream)
        on_issued: 請求實際發出後呼叫 (spelling)
        delay_ms: 防抖延遲（可於每個週期前更新）
        loop: 具備 call_later() 的事件迴圈；預設為執行中的 asyncio 迴圈
        on_event: 事件回呼
    """

    def __init__(
        self,
        transport: Transport,
        *,
        url_builder: Callable[[str], str],
        on_response: Callable[[str, Optional[BinaryIO]], None],
        on_issued: Optional[Callable[[str], None]] = None,
        delay_ms: int = 600,
        loop: Optional[Any] = None,
        on_event: Optional[CloudEventHandler] = None,
    ):
        self._transport = transport
        self._url_builder = url_builder
        self._on_response = on_response
        self._on_issued = on_issued
        self._loop = loop
        self._on_event = on_event
        self._logger = get_logger("cloud.scheduler")

        self.delay_ms = delay_ms
        self._pending_timer: Optional[PendingTimer] = None
        self._in_flight: Optional[InFlightRequest] = None
        self._state = FetchState.IDLE

    # ------------------------------------------------------------------
    # 狀態
    # ------------------------------------------------------------------
    @property
    def state(self) -> FetchState:
        return self._state

    @property
    def pending_spelling(self) -> Optional[str]:
        return self._pending_timer.spelling if self._pending_timer else None

    @property
    def in_flight_spelling(self) -> Optional[str]:
        return self._in_flight.spelling if self._in_flight else None

    def has_pending_timer(self) -> bool:
        return self._pending_timer is not None

    def has_in_flight(self) -> bool:
        return self._in_flight is not None

    def finish(self, state: FetchState) -> None:
        """由協調者在處理完回應後標記週期結束"""
        self._state = state

    # ------------------------------------------------------------------
    # 排程
    # ------------------------------------------------------------------
    def schedule(self, spelling: str) -> None:
        """
        設定防抖計時器；已有計時器時原子地取代之

        新週期開始即代表對舊在途請求失去興趣。
        """
        self._supersede_in_flight()
        self._replace_timer(None)

        timer = PendingTimer(spelling)
        timer.handle = self._get_loop().call_later(self.delay_ms / 1000.0, self._on_timer, timer)
        self._pending_timer = timer
        self._state = FetchState.DEBOUNCING
        self._logger.debug(f"Debounce armed for {spelling!r} ({self.delay_ms}ms)")

    def issue_now(self, spelling: str) -> None:
        """略過防抖，立即發出請求"""
        self._replace_timer(None)
        self._issue(spelling)

    def cancel_timer(self) -> None:
        """只解除防抖計時器；在途請求不受影響"""
        if self._pending_timer is None:
            return
        self._replace_timer(None)
        if self._state is FetchState.DEBOUNCING:
            self._state = FetchState.IDLE

    def cancel(self) -> None:
        """取消計時器與在途請求，回到 IDLE"""
        self._replace_timer(None)
        self._supersede_in_flight()
        self._state = FetchState.IDLE

    def _replace_timer(self, timer: Optional[PendingTimer]) -> None:
        previous = self._pending_timer
        self._pending_timer = timer
        if previous is None:
            return
        if previous.handle is not None:
            previous.handle.cancel()
        self._logger.debug(f"Debounce timer for {previous.spelling!r} superseded")
        self._emit({"type": "timer_superseded", "spelling": previous.spelling})

    def _on_timer(self, timer: PendingTimer) -> None:
        if timer is not self._pending_timer:
            self._logger.debug(f"Stale timer for {timer.spelling!r} fired, ignored")
            return
        self._pending_timer = None
        self._issue(timer.spelling)

    # ------------------------------------------------------------------
    # 請求
    # ------------------------------------------------------------------
    def _issue(self, spelling: str) -> None:
        self._supersede_in_flight()

        url = self._url_builder(spelling)
        request = InFlightRequest(spelling, url)
        self._in_flight = request
        self._state = FetchState.IN_FLIGHT

        self._logger.debug(f"Issuing cloud request for {spelling!r}: {url}")
        self._emit({"type": "request_issued", "spelling": spelling, "url": url})

        # 先切換到 loading，傳輸層可能同步回呼
        if self._on_issued is not None:
            self._on_issued(spelling)
            if request is not self._in_flight:
                return

        request.handle = self._transport.issue_get(url, lambda stream: self._on_complete(request, stream))

    def _supersede_in_flight(self) -> None:
        request = self._in_flight
        if request is None:
            return
        self._in_flight = None
        self._state = FetchState.SUPERSEDED
        if request.handle is not None:
            self._transport.cancel(request.handle)
        self._logger.debug(f"In-flight request for {request.spelling!r} cancelled")
        self._emit({"type": "request_cancelled", "spelling": request.spelling})

    def _on_complete(self, request: InFlightRequest, stream: Optional[BinaryIO]) -> None:
        if request is not self._in_flight:
            self._logger.debug(f"Late response for {request.spelling!r} dropped")
            self._emit({"type": "response_discarded", "spelling": request.spelling, "reason": "stale_request"})
            if stream is not None:
                stream.close()
            return

        self._in_flight = None
        self._on_response(request.spelling, stream)

    # ------------------------------------------------------------------
    def _get_loop(self) -> Any:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def _emit(self, event: CloudEvent) -> None:
        if self._on_event is not None:
            self._on_event(event)
