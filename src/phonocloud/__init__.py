"""
phonocloud - 拼音雲端候選流程 (Cloud Candidate Pipeline)

核心概念：
- 使用者輸入拼音時，以防抖方式向雲端輸入法請求額外候選
- 同一時間只有一個在途請求；新的輸入會取代舊的請求週期
- 回應經廠商解析器正規化後，只有仍與目前拼音相關時才合併進候選表

官方入口（穩定 API）：
- `phonocloud.CloudCandidates`
- `phonocloud.CloudConfig`
- `phonocloud.HttpxTransport`
"""

# =============================================================================
# 協調者（官方入口）
# =============================================================================
from phonocloud.orchestrator import CloudCandidates

# =============================================================================
# 配置
# =============================================================================
from phonocloud.config import CloudConfig, CloudVendor

# =============================================================================
# 資料模型
# =============================================================================
from phonocloud.core.candidate import CandidateType, EnhancedCandidate, SelectResult

# =============================================================================
# 元件（進階用途）
# =============================================================================
from phonocloud.cache import CandidateCache, merge_response
from phonocloud.parsing import (
    BaiduResponseParser,
    GoogleResponseParser,
    ParseOutcome,
    VendorResponse,
    create_parser,
)
from phonocloud.scheduler import FetchState, RequestScheduler
from phonocloud.core.transport_interface import Transport

# =============================================================================
# 日誌工具
# =============================================================================
from phonocloud.utils.logger import enable_debug_logging, enable_timing_logging, get_logger

# =============================================================================
# 依賴檢查工具
# =============================================================================
from phonocloud.utils.lazy_imports import (
    check_http_dependencies,
    check_pinyin_dependencies,
    is_http_available,
    is_pinyin_available,
)

__all__ = [
    # Orchestrator
    "CloudCandidates",
    # Config
    "CloudConfig",
    "CloudVendor",
    # Data model
    "CandidateType",
    "EnhancedCandidate",
    "SelectResult",
    # Components (advanced)
    "CandidateCache",
    "merge_response",
    "BaiduResponseParser",
    "GoogleResponseParser",
    "ParseOutcome",
    "VendorResponse",
    "create_parser",
    "FetchState",
    "RequestScheduler",
    "Transport",
    "HttpxTransport",
    # Logging
    "get_logger",
    "enable_debug_logging",
    "enable_timing_logging",
    # Dependency checks
    "is_http_available",
    "is_pinyin_available",
    "check_http_dependencies",
    "check_pinyin_dependencies",
]

__version__ = "0.1.0"


def __getattr__(name: str):
    if name == "HttpxTransport":
        from phonocloud.transport import HttpxTransport

        return HttpxTransport
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
