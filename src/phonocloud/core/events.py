"""
事件模型（Event Model）

雲端候選流程不直接輸出到 stdout。
若需要觀察「何時開始請求、哪個回應被丟棄」等資訊，請使用事件回呼（event handler）。

設計原則：
- 失敗不中斷輸入：錯誤以標記文字呈現，但不允許「默默」丟棄，丟棄一律發出事件。
"""

from __future__ import annotations

from typing import Callable, Literal, TypedDict


class CloudEvent(TypedDict, total=False):
    type: Literal[
        "fetch_started",
        "reused",
        "timer_superseded",
        "request_issued",
        "request_cancelled",
        "response_merged",
        "response_discarded",
    ]
    spelling: str
    vendor: str

    # request
    url: str
    count: int

    # response
    outcome: str
    annotation: str
    reason: Literal["stale_request", "no_annotation", "irrelevant_annotation"]


CloudEventHandler = Callable[[CloudEvent], None]
