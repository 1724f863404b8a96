"""
客服模块
Support Module
"""

from .chat import ChatMessage, SupportChat

__all__ = ["ChatMessage", "SupportChat"]
