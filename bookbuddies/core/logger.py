"""
日志模块
Logging Module

封装loguru：stderr彩色输出，另写一份按大小滚动的文件日志
"""

import os
import sys
import threading
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from loguru import logger

LOG_LEVEL_ENV = "BOOKBUDDIES_LOG_LEVEL"
LOGS_DIR_ENV = "BOOKBUDDIES_LOGS_DIR"
DEBUG_ENV = "BOOKBUDDIES_DEBUG"

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<magenta>{extra[component]}</magenta> | "
    "<cyan>{message}</cyan>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[component]} | {message}"


def _install_sinks() -> None:
    level = os.getenv(LOG_LEVEL_ENV, "INFO").upper()
    if os.getenv(DEBUG_ENV, "false").lower() == "true":
        level = "DEBUG"

    logs_dir = Path(os.getenv(LOGS_DIR_ENV, "logs"))
    logs_dir.mkdir(parents=True, exist_ok=True)
    log_file = logs_dir / f"bookbuddies_{datetime.now():%Y%m%d_%H%M%S}.log"

    logger.remove()
    logger.configure(extra={"component": "bookbuddies"})
    # CLI 输出 JSON 到 stdout，日志统一走 stderr
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level, colorize=True)
    logger.add(
        str(log_file),
        format=FILE_FORMAT,
        level="DEBUG",
        rotation="10 MB",
        retention="7 days",
        compression="gz",
    )


class Logger:
    """
    日志管理类

    进程内单例。首次实例化时安装输出目标，之后info/debug/warning/error/success
    等调用都转发给loguru
    """

    _instance: Optional["Logger"] = None
    _lock = threading.Lock()

    def __new__(cls):
        with cls._lock:
            if cls._instance is None:
                _install_sinks()
                cls._instance = super().__new__(cls)
        return cls._instance

    def __getattr__(self, name: str) -> Any:
        return getattr(logger, name)


def get_logger(*_args, **_kwargs) -> Logger:
    return Logger()
