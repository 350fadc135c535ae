"""
候選詞資料模型

EnhancedCandidate 是候選表中的一筆資料；candidate_type 決定下游如何處理，
雲端候選的 display_string 會隨請求進度原地更新（pending -> loading -> 結果/錯誤）。
"""

from dataclasses import dataclass
from enum import Enum, IntFlag


class CandidateType(Enum):
    """候選來源類型"""
    NBEST_MATCH = "nbest_match"      # 本地 n-gram 整句候選
    NORMAL = "normal"                # 本地一般候選
    USER = "user"                    # 使用者詞
    CLOUD_INPUT = "cloud_input"      # 雲端候選（含佔位）


class SelectResult(IntFlag):
    """選字結果旗標"""
    ALREADY_HANDLED = 0
    COMMIT = 1
    MODIFY_IN_PLACE = 2


# =============================================================================
# 標記文字
# =============================================================================
CLOUD_PREFIX = "☁"

PENDING_TEXT_WITHOUT_PREFIX = "[⏱️]"
LOADING_TEXT_WITHOUT_PREFIX = "..."
NO_CANDIDATE_TEXT_WITHOUT_PREFIX = "[🚫]"
INVALID_DATA_TEXT_WITHOUT_PREFIX = "[❌]"
BAD_FORMAT_TEXT_WITHOUT_PREFIX = "[❓]"

PENDING_TEXT = CLOUD_PREFIX + PENDING_TEXT_WITHOUT_PREFIX
LOADING_TEXT = CLOUD_PREFIX + LOADING_TEXT_WITHOUT_PREFIX
NO_CANDIDATE_TEXT = CLOUD_PREFIX + NO_CANDIDATE_TEXT_WITHOUT_PREFIX
INVALID_DATA_TEXT = CLOUD_PREFIX + INVALID_DATA_TEXT_WITHOUT_PREFIX
BAD_FORMAT_TEXT = CLOUD_PREFIX + BAD_FORMAT_TEXT_WITHOUT_PREFIX

# 選到這些文字時不可上屏
UNSELECTABLE_TEXTS = frozenset({
    PENDING_TEXT,
    LOADING_TEXT,
    BAD_FORMAT_TEXT,
    INVALID_DATA_TEXT,
    PENDING_TEXT_WITHOUT_PREFIX,
    LOADING_TEXT_WITHOUT_PREFIX,
    BAD_FORMAT_TEXT_WITHOUT_PREFIX,
    INVALID_DATA_TEXT_WITHOUT_PREFIX,
})


@dataclass
class EnhancedCandidate:
    """
    候選表中的一筆候選

    Attributes:
        display_string: 顯示文字（雲端候選可能帶 ☁ 前綴）
        candidate_type: 候選來源類型
        candidate_id: 建立佔位時指定的穩定 id，用來在快取中找回對應項目
    """
    display_string: str
    candidate_type: CandidateType = CandidateType.NORMAL
    candidate_id: int = 0

    @property
    def is_cloud(self) -> bool:
        return self.candidate_type is CandidateType.CLOUD_INPUT

    def with_prefix(self, prefix: str = CLOUD_PREFIX) -> "EnhancedCandidate":
        """回傳加上前綴的副本"""
        return EnhancedCandidate(
            display_string=prefix + self.display_string,
            candidate_type=self.candidate_type,
            candidate_id=self.candidate_id,
        )

    def copy(self) -> "EnhancedCandidate":
        return EnhancedCandidate(self.display_string, self.candidate_type, self.candidate_id)


def is_placeholder_text(text: str) -> bool:
    """是否為不可上屏的過渡標記"""
    return text in UNSELECTABLE_TEXTS
