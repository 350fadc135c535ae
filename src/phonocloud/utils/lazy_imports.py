"""
延遲導入與依賴檢查

httpx 只有真正發出 HTTP 請求時才需要；pypinyin 只有參考編輯器需要。
"""

import importlib
from typing import Any

HTTP_INSTALL_HINT = (
    "缺少 HTTP 依賴。請執行:\n"
    "  pip install httpx"
)
PINYIN_INSTALL_HINT = (
    "缺少拼音依賴。請執行:\n"
    "  pip install pypinyin"
)

_module_cache: dict = {}


def _import(module_name: str, hint: str) -> Any:
    if module_name in _module_cache:
        return _module_cache[module_name]
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise ImportError(hint) from exc
    _module_cache[module_name] = module
    return module


def _is_available(module_name: str) -> bool:
    try:
        importlib.import_module(module_name)
    except ImportError:
        return False
    return True


def get_httpx() -> Any:
    return _import("httpx", HTTP_INSTALL_HINT)


def get_pypinyin() -> Any:
    return _import("pypinyin", PINYIN_INSTALL_HINT)


def is_http_available() -> bool:
    return _is_available("httpx")


def is_pinyin_available() -> bool:
    return _is_available("pypinyin")


def check_http_dependencies() -> None:
    """缺少 httpx 時拋出帶安裝提示的 ImportError"""
    get_httpx()


def check_pinyin_dependencies() -> None:
    """缺少 pypinyin 時拋出帶安裝提示的 ImportError"""
    get_pypinyin()
