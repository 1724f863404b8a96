"""
BookBuddies 二手书交易
BookBuddies Used-Book Marketplace

书籍发布表单、客服会话与卖家注册的核心逻辑
"""

__version__ = "1.0.0"
__author__ = "Project Team"

from .core.config import Config
from .core.logger import Logger

__all__ = [
    "Config",
    "Logger",
    "__version__",
]
