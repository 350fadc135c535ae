"""
日誌與計時工具

所有 logger 都掛在 "phonocloud" 之下，預設只安裝 NullHandler，
由使用者透過標準 logging 或 enable_debug_logging() 決定輸出。

使用方式:
    from phonocloud.utils.logger import get_logger, TimingContext

    logger = get_logger("cloud.scheduler")
    with TimingContext("parse", logger=logger):
        ...
"""

import logging
import time
from typing import Callable, Optional

ROOT_LOGGER_NAME = "phonocloud"
DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())

_timing_enabled = False


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    取得 phonocloud 命名空間下的 logger

    Args:
        name: 子 logger 名稱，例如 "cloud.scheduler"；None 則回傳根 logger
    """
    if not name:
        return logging.getLogger(ROOT_LOGGER_NAME)
    if name.startswith(ROOT_LOGGER_NAME):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def setup_logger(level: int = logging.INFO, fmt: str = DEFAULT_FORMAT) -> logging.Logger:
    """
    為根 logger 加上一個 StreamHandler（重複呼叫只會調整等級）
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)

    for handler in logger.handlers:
        if getattr(handler, "_phonocloud_handler", False):
            handler.setLevel(level)
            return logger

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt))
    handler._phonocloud_handler = True
    logger.addHandler(handler)
    return logger


def enable_debug_logging() -> logging.Logger:
    """開啟 DEBUG 等級輸出"""
    return setup_logger(level=logging.DEBUG)


def enable_timing_logging() -> logging.Logger:
    """開啟計時日誌（TimingContext 會以 INFO 等級輸出）"""
    global _timing_enabled
    _timing_enabled = True
    return setup_logger(level=logging.INFO)


class TimingContext:
    """
    計時 context manager

    結束時以指定等級記錄耗時，並呼叫 callback(operation, elapsed)。

    範例:
        >>> with TimingContext("parse", callback=lambda op, t: print(op)):
        ...     pass
        parse
    """

    def __init__(
        self,
        operation: str,
        logger: Optional[logging.Logger] = None,
        level: int = logging.DEBUG,
        callback: Optional[Callable[[str, float], None]] = None,
    ):
        self.operation = operation
        self.logger = logger or get_logger("timing")
        self.level = logging.INFO if _timing_enabled else level
        self.callback = callback
        self.elapsed = 0.0
        self._start = 0.0

    def __enter__(self) -> "TimingContext":
        self._start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.elapsed = time.perf_counter() - self._start
        self.logger.log(self.level, f"[Timing] {self.operation}: {self.elapsed * 1000:.2f}ms")
        if self.callback is not None:
            self.callback(self.operation, self.elapsed)
        return False
