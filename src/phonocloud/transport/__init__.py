"""
傳輸層實作

安裝 HTTP 支援:
    pip install httpx
"""

from __future__ import annotations

import importlib
from typing import Any

from phonocloud.utils.lazy_imports import check_http_dependencies

_LAZY_IMPORTS = {
    "HttpxTransport": (".httpx_transport", "HttpxTransport"),
}

__all__ = ["HttpxTransport"]


def __getattr__(name: str) -> Any:
    if name not in _LAZY_IMPORTS:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    check_http_dependencies()
    module_path, attr_name = _LAZY_IMPORTS[name]
    module = importlib.import_module(module_path, __name__)
    value = getattr(module, attr_name)
    globals()[name] = value
    return value


def __dir__() -> list[str]:
    return sorted(set(list(globals().keys()) + list(_LAZY_IMPORTS.keys())))
