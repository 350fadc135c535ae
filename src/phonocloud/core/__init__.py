"""
核心抽象層

定義候選資料模型、編輯器與傳輸層介面，以及事件模型。
"""

from .candidate import (
    CLOUD_PREFIX,
    CandidateType,
    EnhancedCandidate,
    SelectResult,
    is_placeholder_text,
)
from .editor_interface import LookupTable, PhoneticEditor
from .events import CloudEvent, CloudEventHandler
from .transport_interface import CompletionCallback, Transport

__all__ = [
    "CLOUD_PREFIX",
    "CandidateType",
    "EnhancedCandidate",
    "SelectResult",
    "is_placeholder_text",
    "LookupTable",
    "PhoneticEditor",
    "CloudEvent",
    "CloudEventHandler",
    "CompletionCallback",
    "Transport",
]
