"""
參考用拼音編輯器

以詞表 + pypinyin 實作最小的本地候選來源，示範（並測試）CloudCandidates
與宿主編輯器、候選表之間的完整互動：按鍵 -> 重算候選 -> 插入雲端佔位 ->
回應後刷新 -> 選字上屏。

使用方式:
    from phonocloud.editor import SimplePinyinEditor

    editor = SimplePinyinEditor(["你好", "拟好", "百度"], transport=transport)
    editor.set_text("nihao")
    editor.select_candidate(0)
    print(editor.committed)

注意：此模組使用延遲導入 (Lazy Import) 機制，
僅在實際計算拼音時才會載入 pypinyin。
"""

from functools import lru_cache
from typing import Callable, Dict, Iterable, List, Optional

from phonocloud.config import CloudConfig
from phonocloud.core.candidate import CandidateType, EnhancedCandidate, SelectResult
from phonocloud.core.events import CloudEventHandler
from phonocloud.core.transport_interface import Transport
from phonocloud.orchestrator import CloudCandidates
from phonocloud.utils.lazy_imports import get_pypinyin
from phonocloud.utils.logger import get_logger

logger = get_logger("editor.simple")


# =============================================================================
# 拼音快取
# =============================================================================
# pypinyin 呼叫是效能瓶頸，使用 lru_cache 快取

@lru_cache(maxsize=50000)
def cached_get_pinyin_string(text: str) -> str:
    """快取版拼音字串計算（無聲調、無分隔）"""
    pypinyin = get_pypinyin()
    return "".join(pypinyin.lazy_pinyin(text, style=pypinyin.NORMAL))


class SimpleLookupTable:
    """候選表：只保存顯示字串與游標"""

    def __init__(self):
        self.labels: List[str] = []
        self._cursor = 0

    def __len__(self) -> int:
        return len(self.labels)

    def __getitem__(self, index: int) -> str:
        return self.labels[index]

    def cursor_pos(self) -> int:
        return self._cursor

    def set_cursor_pos(self, pos: int) -> None:
        if not self.labels:
            self._cursor = 0
            return
        self._cursor = max(0, min(pos, len(self.labels) - 1))

    def clear(self) -> None:
        self.labels = []

    def append_candidate(self, label: str) -> None:
        self.labels.append(label)


class SimplePinyinEditor:
    """
    詞表式拼音編輯器

    候選順序:
    - NBEST_MATCH: 拼音與組字文字完全相同的詞
    - NORMAL: 拼音以組字文字開頭的詞
    - 雲端候選插在 NBEST_MATCH 之後

    Args:
        lexicon: 詞表
        transport: 傳輸層；None 表示不使用雲端候選
        cloud_config: 雲端配置
        loop: 傳給 CloudCandidates 的事件迴圈
        double_pinyin: 是否為雙拼模式（spelling 取自 buffer）
        on_event: 雲端事件回呼
        on_repaint: 候選表重繪時的回呼
    """

    def __init__(
        self,
        lexicon: Iterable[str],
        *,
        transport: Optional[Transport] = None,
        cloud_config: Optional[CloudConfig] = None,
        loop=None,
        double_pinyin: bool = False,
        on_event: Optional[CloudEventHandler] = None,
        on_repaint: Optional[Callable[[List[str]], None]] = None,
    ):
        self.text = ""
        self.buffer = ""
        self.auxiliary_text = ""
        self.double_pinyin = double_pinyin
        self.lookup_table = SimpleLookupTable()
        self.candidates: List[EnhancedCandidate] = []
        self.committed: List[str] = []
        self.repaint_count = 0
        self._on_repaint = on_repaint

        self._index: Dict[str, List[str]] = {}
        for phrase in lexicon:
            self._index.setdefault(cached_get_pinyin_string(phrase), []).append(phrase)

        self.cloud: Optional[CloudCandidates] = None
        if transport is not None:
            self.cloud = CloudCandidates(self, transport, cloud_config, loop=loop, on_event=on_event)

    # ------------------------------------------------------------------
    # 輸入
    # ------------------------------------------------------------------
    def set_text(self, text: str, buffer: Optional[str] = None) -> None:
        """設定組字文字（雙拼模式可另外指定 buffer）並刷新"""
        self.text = text
        self.buffer = buffer if buffer is not None else text
        self.update()

    def insert(self, ch: str) -> None:
        self.set_text(self.text + ch)

    def backspace(self) -> None:
        self.set_text(self.text[:-1])

    def reset(self) -> None:
        self.text = ""
        self.buffer = ""
        self.candidates = []
        self.lookup_table.clear()
        self.lookup_table.set_cursor_pos(0)

    def update(self) -> None:
        """重算候選、重建候選表並重繪"""
        self.update_candidates()
        self.lookup_table.clear()
        self.fill_lookup_table()
        self.update_lookup_table_fast()

    # ------------------------------------------------------------------
    # PhoneticEditor
    # ------------------------------------------------------------------
    def update_auxiliary_text(self) -> None:
        self.auxiliary_text = self.buffer

    def update_candidates(self) -> None:
        candidates: List[EnhancedCandidate] = []
        if self.text:
            for phrase in self._index.get(self.text, []):
                candidates.append(EnhancedCandidate(phrase, CandidateType.NBEST_MATCH))
            for spelling, phrases in self._index.items():
                if spelling != self.text and spelling.startswith(self.text):
                    candidates.extend(EnhancedCandidate(phrase, CandidateType.NORMAL) for phrase in phrases)

        if self.cloud is not None:
            self.cloud.process_candidates(candidates)

        self.candidates = candidates

    def fill_lookup_table(self) -> None:
        for candidate in self.candidates:
            self.lookup_table.append_candidate(candidate.display_string)

    def update_lookup_table_fast(self) -> None:
        self.repaint_count += 1
        if self._on_repaint is not None:
            self._on_repaint(list(self.lookup_table.labels))

    # ------------------------------------------------------------------
    # 選字
    # ------------------------------------------------------------------
    def select_candidate(self, index: int) -> Optional[str]:
        """
        選字；雲端候選交給 CloudCandidates 判斷是否可上屏

        Returns:
            上屏的文字，未上屏則為 None
        """
        candidate = self.candidates[index]

        if candidate.candidate_type is CandidateType.CLOUD_INPUT:
            result = self.cloud.select_candidate(candidate)
            if not result & SelectResult.COMMIT:
                logger.debug(f"Placeholder selected at {index}, nothing committed")
                return None

        return self.commit(candidate.display_string)

    def commit(self, text: str) -> str:
        self.committed.append(text)
        self.reset()
        return text
