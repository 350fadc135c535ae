"""
雲端候選協調者 (CloudCandidates)

拼音編輯器在每次按鍵、每次選字時呼叫的門面：
持有雲端請求狀態（快取 + 排程器），把解析結果合併回快取，
並在快取有使用者可見的變化時刷新候選表。

使用方式:
    from phonocloud import CloudCandidates, CloudConfig, HttpxTransport

    cloud = CloudCandidates(editor, HttpxTransport(), CloudConfig(candidates_number=2))

    # 編輯器重算候選時
    cloud.process_candidates(candidates)

    # 使用者選中雲端候選時
    result = cloud.select_candidate(candidate)
"""

from typing import Any, BinaryIO, Callable, List, Optional, Union

from phonocloud.cache import CandidateCache, splice
from phonocloud.config import CloudConfig
from phonocloud.core.candidate import CandidateType, EnhancedCandidate, SelectResult
from phonocloud.core.editor_interface import PhoneticEditor
from phonocloud.core.events import CloudEvent, CloudEventHandler
from phonocloud.core.transport_interface import Transport
from phonocloud.parsing import ParseOutcome, create_parser
from phonocloud.scheduler import FetchState, RequestScheduler
from phonocloud.utils.logger import TimingContext, get_logger
from phonocloud.utils.text import byte_length, normalize_spelling, utf8_length

ConfigSource = Union[CloudConfig, Callable[[], CloudConfig]]


class CloudCandidates:
    """
    雲端候選流程

    職責:
    - 決定每次候選重算時要重用快取、略過、或開始新的請求週期
    - 在插入點放入佔位候選，交給排程器防抖後發出請求
    - 解析回應、檢查相關性並合併進快取
    - 快取變動後刷新候選表（保留游標位置）

    Args:
        editor: 拼音編輯器
        transport: 傳輸層
        config: 配置快照，或回傳快照的函數（每個週期開始前重新讀取）
        loop: 具備 call_later() 的事件迴圈，預設為執行中的 asyncio 迴圈
        on_event: 事件回呼
    """

    def __init__(
        self,
        editor: PhoneticEditor,
        transport: Transport,
        config: Optional[ConfigSource] = None,
        *,
        loop: Optional[Any] = None,
        on_event: Optional[CloudEventHandler] = None,
    ):
        self._editor = editor
        self._config_source = config if config is not None else CloudConfig()
        self._config = self._read_config()
        self._on_event = on_event
        self._logger = get_logger("cloud.orchestrator")

        self._cache = CandidateCache()
        self._scheduler = RequestScheduler(
            transport,
            url_builder=lambda spelling: self._config.build_url(spelling),
            on_response=self._handle_response,
            on_issued=self._handle_issued,
            delay_ms=self._config.delay_ms,
            loop=loop,
            on_event=on_event,
        )

    # ------------------------------------------------------------------
    # 屬性
    # ------------------------------------------------------------------
    @property
    def config(self) -> CloudConfig:
        return self._config

    @property
    def cache(self) -> CandidateCache:
        return self._cache

    @property
    def cached_candidates(self) -> List[EnhancedCandidate]:
        return self._cache.entries

    @property
    def last_requested_spelling(self) -> str:
        return self._cache.last_requested_spelling

    @property
    def scheduler(self) -> RequestScheduler:
        return self._scheduler

    @property
    def state(self) -> FetchState:
        return self._scheduler.state

    # ------------------------------------------------------------------
    # 編輯器入口
    # ------------------------------------------------------------------
    def process_candidates(self, candidates: List[EnhancedCandidate]) -> bool:
        """
        在候選列表中放入雲端候選

        Returns:
            True 表示開始了新的請求週期
        """
        if not candidates:
            self._scheduler.cancel_timer()
            return False

        if utf8_length(candidates[0].display_string) < self._config.min_utf8_trigger_length:
            # 放棄的拼音不該在防抖結束後仍被請求
            self._scheduler.cancel_timer()
            self._cache.clear_last_requested()
            return False

        insert_pos = self._find_insert_position(candidates)
        spelling = self.current_spelling()

        if self._cache.is_unchanged(spelling):
            splice(candidates, insert_pos, self._cache.prefixed_entries())
            self._emit({"type": "reused", "spelling": spelling, "count": len(self._cache)})
            return False

        if insert_pos < len(candidates) and candidates[insert_pos].candidate_type is CandidateType.CLOUD_INPUT:
            return False

        self._start_cycle()
        splice(candidates, insert_pos, self._cache.prefixed_entries())
        self._scheduler.schedule(spelling)

        self._logger.debug(f"Cloud fetch started for {spelling!r} ({len(self._cache)} placeholders at {insert_pos})")
        self._emit({
            "type": "fetch_started",
            "spelling": spelling,
            "vendor": self._config.vendor.name,
            "count": len(self._cache),
        })
        return True

    def select_candidate(self, candidate: EnhancedCandidate) -> SelectResult:
        """
        使用者選中雲端候選

        仍是過渡標記時回傳 ALREADY_HANDLED（不可上屏）；
        否則以 candidate_id 找回快取文字寫入 candidate，回傳 COMMIT | MODIFY_IN_PLACE。
        """
        return self._cache.select(candidate)

    def request_now(self, spelling: Optional[str] = None) -> None:
        """略過防抖立即請求（預設使用目前拼音）"""
        if spelling is None:
            spelling = self.current_spelling()
        if not spelling:
            return
        self._start_cycle()
        self._scheduler.issue_now(spelling)

    def close(self) -> None:
        """取消計時器與在途請求"""
        self._scheduler.cancel()

    def current_spelling(self) -> str:
        """全拼模式為組字文字；雙拼模式為去除分隔的緩衝區"""
        if self._editor.double_pinyin:
            self._editor.update_auxiliary_text()
        return self._read_spelling()

    # ------------------------------------------------------------------
    # 候選表刷新
    # ------------------------------------------------------------------
    def update_lookup_table(self) -> None:
        """保留游標，重算候選，重建候選表並通知重繪"""
        with TimingContext("CloudCandidates.update_lookup_table", logger=self._logger, callback=self._config.on_timing):
            table = self._editor.lookup_table
            cursor = table.cursor_pos()

            self._editor.update_candidates()

            table.clear()
            self._editor.fill_lookup_table()
            table.set_cursor_pos(cursor)

            self._editor.update_lookup_table_fast()

    def _refresh_if_composing(self) -> None:
        if byte_length(self._editor.text) >= self._config.min_trigger_length:
            self.update_lookup_table()

    # ------------------------------------------------------------------
    # 排程器回呼
    # ------------------------------------------------------------------
    def _handle_issued(self, spelling: str) -> None:
        self._cache.last_requested_spelling = spelling
        self._cache.mark_loading()
        self._refresh_if_composing()

    def _handle_response(self, spelling: str, stream: Optional[BinaryIO]) -> None:
        parser = create_parser(self._config.vendor)
        with TimingContext(f"parse({parser.vendor_name})", logger=self._logger, callback=self._config.on_timing):
            outcome = parser.parse(stream)
        response = parser.response

        result = self._cache.merge(
            response,
            current_spelling=self._read_spelling(),
            trust_annotation=self._config.vendor.trusts_annotation,
        )

        if not result.applied:
            self._scheduler.finish(FetchState.SUPERSEDED)
            self._emit({
                "type": "response_discarded",
                "spelling": spelling,
                "outcome": outcome.value,
                "annotation": response.annotation or "",
                "reason": result.reason,
            })
            return

        self._scheduler.finish(FetchState.ERRORED if outcome.is_error else FetchState.RESOLVED)
        if outcome is not ParseOutcome.SUCCESS:
            self._logger.debug(f"Cloud request for {spelling!r} ended with {outcome.value}")
        self._emit({
            "type": "response_merged",
            "spelling": spelling,
            "outcome": outcome.value,
            "annotation": response.annotation or "",
            "count": len(response.candidates),
        })

        self._refresh_if_composing()

    # ------------------------------------------------------------------
    def _start_cycle(self) -> None:
        self._config = self._read_config()
        self._scheduler.delay_ms = self._config.delay_ms
        # 快取已屬於新週期，舊拼音不可再被視為「未變」
        self._cache.clear_last_requested()
        self._cache.reset_placeholders(self._config.candidates_number)

    def _read_config(self) -> CloudConfig:
        if callable(self._config_source):
            return self._config_source()
        return self._config_source

    def _read_spelling(self) -> str:
        if self._editor.double_pinyin:
            return normalize_spelling(self._editor.buffer)
        return self._editor.text

    @staticmethod
    def _find_insert_position(candidates: List[EnhancedCandidate]) -> int:
        for index, candidate in enumerate(candidates):
            if candidate.candidate_type is not CandidateType.NBEST_MATCH:
                return index
        return len(candidates)

    def _emit(self, event: CloudEvent) -> None:
        if self._on_event is not None:
            self._on_event(event)
