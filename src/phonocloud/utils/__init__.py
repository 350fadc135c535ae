"""
工具模組

提供日誌、計時、拼音字串處理、延遲導入等通用工具。
"""

from .lazy_imports import (
    HTTP_INSTALL_HINT,
    PINYIN_INSTALL_HINT,
    check_http_dependencies,
    check_pinyin_dependencies,
    is_http_available,
    is_pinyin_available,
)
from .logger import (
    TimingContext,
    enable_debug_logging,
    enable_timing_logging,
    get_logger,
    setup_logger,
)
from .text import normalize_spelling, strip_annotation_separators, utf8_length

__all__ = [
    # 日誌工具
    "get_logger",
    "setup_logger",
    "enable_debug_logging",
    "enable_timing_logging",
    "TimingContext",

    # 拼音字串
    "normalize_spelling",
    "strip_annotation_separators",
    "utf8_length",

    # 依賴檢查
    "is_http_available",
    "is_pinyin_available",
    "check_http_dependencies",
    "check_pinyin_dependencies",
    "HTTP_INSTALL_HINT",
    "PINYIN_INSTALL_HINT",
]
