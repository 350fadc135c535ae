"""
全域配置模組

雲端候選詞的唯讀配置快照：廠商、延遲、候選數量、觸發長度與 URL 樣板。

使用方式:
    from phonocloud.config import CloudConfig, CloudVendor

    config = CloudConfig(vendor=CloudVendor.GOOGLE, delay_ms=300)
    url = config.build_url("nihao")

    # 從宿主程式的設定字典建立
    config = CloudConfig.from_mapping({"cloud-input-source": 1, "cloud-candidates-number": 3})
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional
from urllib.parse import quote

from .utils.logger import setup_logger


class CloudVendor(Enum):
    """雲端輸入來源"""
    BAIDU = 0
    GOOGLE = 1

    @property
    def trusts_annotation(self) -> bool:
        """
        回應中的 annotation 是否可用來驗證相關性

        百度回傳的 annotation 是它自己切分過的拼音，不保證與輸入一致，
        因此一律視為相關。
        """
        return self is CloudVendor.GOOGLE

    @classmethod
    def coerce(cls, value: Any) -> "CloudVendor":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                raise ValueError(f"Unknown cloud vendor: {value!r}") from None
        try:
            return cls(int(value))
        except (TypeError, ValueError):
            raise ValueError(f"Unknown cloud vendor: {value!r}") from None


BAIDU_URL_TEMPLATE = (
    "http://olime.baidu.com/py?input={spelling}&inputtype=py&bg=0&ed={count}"
    "&result=hanzi&resultcoding=utf-8&ch_en=1&clientinfo=web&version=1"
)
GOOGLE_URL_TEMPLATE = "https://www.google.com/inputtools/request?ime=pinyin&text={spelling}&num={count}"

DEFAULT_URL_TEMPLATES: Dict[CloudVendor, str] = {
    CloudVendor.BAIDU: BAIDU_URL_TEMPLATE,
    CloudVendor.GOOGLE: GOOGLE_URL_TEMPLATE,
}

# 宿主設定鍵 -> 欄位名稱
_SETTING_KEYS = {
    "cloud-input-source": "vendor",
    "cloud-request-delay-time": "delay_ms",
    "cloud-candidates-number": "candidates_number",
}


def configure_logging(verbose: bool = False) -> None:
    """
    根據 verbose 設定配置 logging

    Args:
        verbose: 是否開啟詳細日誌
    """
    if verbose:
        setup_logger(level=logging.DEBUG)


@dataclass
class CloudConfig:
    """
    雲端候選詞配置

    屬性:
        vendor: 雲端來源
        delay_ms: 防抖延遲（毫秒）
        candidates_number: 每次請求的雲端候選數量，亦即佔位候選數量
        min_trigger_length: 組字文字少於此位元組數時，回應不再刷新候選表
        min_utf8_trigger_length: 首個 n-gram 候選少於此字元數時不發出請求
        url_templates: 各廠商的 URL 樣板，含 {spelling} 與 {count}
        request_timeout: HTTP 逾時秒數
        verbose: 是否開啟詳細日誌
        on_timing: 計時回呼 (operation: str, elapsed: float) -> None
    """

    vendor: CloudVendor = CloudVendor.BAIDU
    delay_ms: int = 600
    candidates_number: int = 1
    min_trigger_length: int = 2
    min_utf8_trigger_length: int = 2
    url_templates: Dict[CloudVendor, str] = field(default_factory=lambda: dict(DEFAULT_URL_TEMPLATES))
    request_timeout: float = 10.0

    verbose: bool = False
    on_timing: Optional[Callable[[str, float], None]] = None

    def __post_init__(self):
        self.vendor = CloudVendor.coerce(self.vendor)

        if self.delay_ms < 0:
            raise ValueError(f"delay_ms must be >= 0, got {self.delay_ms}")
        if self.candidates_number < 1:
            raise ValueError(f"candidates_number must be >= 1, got {self.candidates_number}")
        if self.min_trigger_length < 0 or self.min_utf8_trigger_length < 0:
            raise ValueError("Trigger lengths must be >= 0")
        if self.request_timeout <= 0:
            raise ValueError(f"request_timeout must be > 0, got {self.request_timeout}")
        if self.vendor not in self.url_templates:
            raise ValueError(f"No URL template for vendor {self.vendor.name}")

        configure_logging(self.verbose)

    @property
    def delay_seconds(self) -> float:
        return self.delay_ms / 1000.0

    def build_url(self, spelling: str) -> str:
        """以 URL 編碼後的拼音與候選數量填入廠商樣板"""
        template = self.url_templates[self.vendor]
        return template.format(spelling=quote(spelling, safe=""), count=self.candidates_number)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "CloudConfig":
        """
        從設定字典建立配置

        同時接受宿主設定鍵（如 "cloud-input-source"）與欄位名稱，
        未知鍵會被忽略。
        """
        field_names = set(cls.__dataclass_fields__)
        kwargs: Dict[str, Any] = {}
        for key, value in mapping.items():
            name = _SETTING_KEYS.get(key, key.replace("-", "_"))
            if name in field_names:
                kwargs[name] = value

        for int_field in ("delay_ms", "candidates_number", "min_trigger_length", "min_utf8_trigger_length"):
            if int_field in kwargs:
                kwargs[int_field] = int(kwargs[int_field])

        if "url_templates" in kwargs:
            templates = dict(DEFAULT_URL_TEMPLATES)
            templates.update({CloudVendor.coerce(k): v for k, v in kwargs["url_templates"].items()})
            kwargs["url_templates"] = templates

        return cls(**kwargs)


# 預設配置實例
DEFAULT_CONFIG = CloudConfig()
