"""
解析結果

ParseOutcome 是解析器唯一的錯誤通道：解析失敗不拋例外，只回傳代碼。
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class ParseOutcome(Enum):
    SUCCESS = "success"
    INVALID_DATA = "invalid_data"      # 文件可解析，但不符合預期結構
    BAD_FORMAT = "bad_format"          # 不是合法文件
    NO_CANDIDATES = "no_candidates"    # 合法回應，但沒有候選
    NETWORK_ERROR = "network_error"    # 沒有拿到串流

    @property
    def is_error(self) -> bool:
        return self in (ParseOutcome.INVALID_DATA, ParseOutcome.BAD_FORMAT, ParseOutcome.NETWORK_ERROR)


@dataclass
class VendorResponse:
    """
    一次解析的正規化結果

    Attributes:
        outcome: 解析結果代碼
        candidates: 依廠商順序排列的候選字串
        annotation: 廠商回傳的拼音（用來驗證相關性），沒有則為 None
    """
    outcome: ParseOutcome
    candidates: List[str] = field(default_factory=list)
    annotation: Optional[str] = None
