"""
編輯器介面 Protocol

CloudCandidates 對拼音編輯器與候選表的最小需求：
讀取組字文字、要求重算候選、重建並刷新候選表、保存/還原游標。
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class LookupTable(Protocol):
    def cursor_pos(self) -> int:
        """目前游標位置"""
        ...

    def set_cursor_pos(self, pos: int) -> None:
        ...

    def clear(self) -> None:
        ...


@runtime_checkable
class PhoneticEditor(Protocol):
    """
    拼音編輯器

    text: 全拼模式下的組字文字
    buffer: 雙拼模式下的緩衝區（含空白與 | 分隔）
    double_pinyin: 是否為雙拼模式
    """

    text: str
    buffer: str
    double_pinyin: bool
    lookup_table: LookupTable

    def update_auxiliary_text(self) -> None:
        """雙拼模式下，讀取 buffer 前先刷新輔助文字"""
        ...

    def update_candidates(self) -> None:
        """重算完整候選列表（會再次呼叫 CloudCandidates.process_candidates）"""
        ...

    def fill_lookup_table(self) -> None:
        ...

    def update_lookup_table_fast(self) -> None:
        """通知宿主 UI 重繪候選表"""
        ...
