"""
核心模块
Core Module

提供配置管理、日志系统与异常定义
"""

from .config import Config
from .logger import Logger

__all__ = ["Config", "Logger"]
