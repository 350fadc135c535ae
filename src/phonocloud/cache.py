"""
雲端候選快取與合併

快取保存最近一次請求的雲端候選（含過渡標記），與可見候選表是兩個獨立容器：
- merge_response() 是純函數：(快取, 回應) -> 新快取
- splice 步驟只把快取項目的副本插入可見候選表

快取項目一律存放「不含前綴」的文字，
插入可見候選表時再加上 ☁ 前綴。
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

from phonocloud.core.candidate import (
    BAD_FORMAT_TEXT_WITHOUT_PREFIX,
    INVALID_DATA_TEXT_WITHOUT_PREFIX,
    LOADING_TEXT_WITHOUT_PREFIX,
    NO_CANDIDATE_TEXT_WITHOUT_PREFIX,
    PENDING_TEXT_WITHOUT_PREFIX,
    CandidateType,
    EnhancedCandidate,
    SelectResult,
    is_placeholder_text,
)
from phonocloud.parsing.outcome import ParseOutcome, VendorResponse
from phonocloud.utils.logger import get_logger

logger = get_logger("cloud.cache")

OUTCOME_MARKERS: Dict[ParseOutcome, str] = {
    ParseOutcome.NO_CANDIDATES: NO_CANDIDATE_TEXT_WITHOUT_PREFIX,
    ParseOutcome.INVALID_DATA: INVALID_DATA_TEXT_WITHOUT_PREFIX,
    ParseOutcome.BAD_FORMAT: BAD_FORMAT_TEXT_WITHOUT_PREFIX,
    ParseOutcome.NETWORK_ERROR: INVALID_DATA_TEXT_WITHOUT_PREFIX,
}


@dataclass
class MergeResult:
    """
    合併結果

    Attributes:
        entries: 合併後的快取項目（新列表）
        applied: 快取內容是否被回應更新
        reason: 未套用時的原因（"no_annotation" / "irrelevant_annotation"）
    """
    entries: List[EnhancedCandidate]
    applied: bool
    reason: Optional[str] = None


def merge_response(
    entries: List[EnhancedCandidate],
    response: VendorResponse,
    *,
    current_spelling: Optional[str],
    trust_annotation: bool,
) -> MergeResult:
    """
    把一次解析結果合併進快取

    規則:
    1. NETWORK_ERROR：全部改為無效標記（沒有 annotation 可檢查）
    2. 沒有 annotation：視為已取消/已被取代的請求，不更新
    3. 廠商 annotation 可信時，必須等於目前的拼音才採用
    4. SUCCESS：逐一覆寫，超出回傳數量的項目保留原文字
    5. 其他結果：全部改為對應標記
    """
    merged = [entry.copy() for entry in entries]

    if response.outcome is ParseOutcome.NETWORK_ERROR:
        for entry in merged:
            entry.display_string = OUTCOME_MARKERS[ParseOutcome.NETWORK_ERROR]
        return MergeResult(merged, applied=True)

    if response.annotation is None:
        return MergeResult(merged, applied=False, reason="no_annotation")

    if trust_annotation and response.annotation != current_spelling:
        return MergeResult(merged, applied=False, reason="irrelevant_annotation")

    if response.outcome is ParseOutcome.SUCCESS:
        for entry, text in zip(merged, response.candidates):
            entry.display_string = text
    else:
        marker = OUTCOME_MARKERS[response.outcome]
        for entry in merged:
            entry.display_string = marker

    return MergeResult(merged, applied=True)


def splice(visible: List[EnhancedCandidate], index: int, entries: List[EnhancedCandidate]) -> None:
    """把項目副本插入可見候選表的 index 位置"""
    visible[index:index] = [entry.copy() for entry in entries]


class CandidateCache:
    """
    雲端候選快取

    不變量：開始請求後，entries 數量等於配置的雲端候選數量，
    candidate_id 為 0..count-1 且在 pending -> loading -> 結果的過程中不變。
    """

    def __init__(self):
        self.entries: List[EnhancedCandidate] = []
        self.last_requested_spelling: str = ""

    def __len__(self) -> int:
        return len(self.entries)

    def reset_placeholders(self, count: int) -> List[EnhancedCandidate]:
        """清空快取並建立 count 個 pending 佔位"""
        self.entries = [
            EnhancedCandidate(
                display_string=PENDING_TEXT_WITHOUT_PREFIX,
                candidate_type=CandidateType.CLOUD_INPUT,
                candidate_id=index,
            )
            for index in range(count)
        ]
        return self.entries

    def mark_loading(self) -> None:
        for entry in self.entries:
            entry.display_string = LOADING_TEXT_WITHOUT_PREFIX

    def clear_last_requested(self) -> None:
        self.last_requested_spelling = ""

    def is_unchanged(self, spelling: str) -> bool:
        return bool(self.last_requested_spelling) and self.last_requested_spelling == spelling

    def prefixed_entries(self) -> List[EnhancedCandidate]:
        """加上 ☁ 前綴的快取副本"""
        return [entry.with_prefix() for entry in self.entries]

    def merge(self, response: VendorResponse, *, current_spelling: Optional[str], trust_annotation: bool) -> MergeResult:
        result = merge_response(
            self.entries,
            response,
            current_spelling=current_spelling,
            trust_annotation=trust_annotation,
        )
        if result.applied:
            self.entries = result.entries
        else:
            logger.debug(f"Response discarded ({result.reason}), annotation={response.annotation!r}")
        return result

    def select(self, candidate: EnhancedCandidate) -> SelectResult:
        """
        處理使用者選中的雲端候選

        過渡標記不可上屏；否則以 candidate_id 找回快取項目，
        把目前文字寫回 candidate，並要求原地修改後上屏。
        """
        if not candidate.is_cloud:
            raise ValueError(f"Not a cloud candidate: {candidate.candidate_type}")

        if is_placeholder_text(candidate.display_string):
            return SelectResult.ALREADY_HANDLED

        for entry in self.entries:
            if entry.candidate_id == candidate.candidate_id:
                candidate.display_string = entry.display_string
                return SelectResult.COMMIT | SelectResult.MODIFY_IN_PLACE

        return SelectResult.ALREADY_HANDLED
