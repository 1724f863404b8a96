"""
统一异常处理模块
Unified Error Handling

定义异常层级与通用装饰器
"""

import asyncio
import time
from functools import wraps
from typing import Callable, Any, Dict, Optional

from bookbuddies.core.logger import get_logger


def log_execution_time(logger=None):
    """
    记录执行时间装饰器

    Args:
        logger: 日志记录器
    """
    if logger is None:
        logger = get_logger()

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        async def async_wrapper(*args, **kwargs):
            start_time = time.time()

            try:
                result = await func(*args, **kwargs)
                elapsed = time.time() - start_time
                logger.debug(f"{func.__name__} executed in {elapsed:.2f}s")
                return result
            except Exception as e:
                elapsed = time.time() - start_time
                logger.error(f"{func.__name__} failed after {elapsed:.2f}s: {e}")
                raise

        @wraps(func)
        def sync_wrapper(*args, **kwargs):
            start_time = time.time()

            try:
                result = func(*args, **kwargs)
                elapsed = time.time() - start_time
                logger.debug(f"{func.__name__} executed in {elapsed:.2f}s")
                return result
            except Exception as e:
                elapsed = time.time() - start_time
                logger.error(f"{func.__name__} failed after {elapsed:.2f}s: {e}")
                raise

        if asyncio.iscoroutinefunction(func):
            return async_wrapper
        return sync_wrapper
    return decorator


class BookBuddiesError(Exception):
    """基础异常类"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典"""
        return {
            "type": self.__class__.__name__,
            "message": self.message,
            "details": self.details
        }


class ConfigError(BookBuddiesError):
    """配置错误"""
    pass


class StorageError(BookBuddiesError):
    """存储文件损坏或不可写"""
    pass


class ChatError(BookBuddiesError):
    """客服会话错误"""
    pass


class ListingFormError(BookBuddiesError):
    """
    发布表单错误基类

    作为结果值返回给调用方，validate/submit 不会抛出
    """
    pass


class MissingRequiredField(ListingFormError):
    """书籍必填字段为空"""

    def __init__(self, fields: list, message: str = "Please fill in all required fields"):
        super().__init__(message, {"fields": list(fields)})
        self.fields = list(fields)


class MissingShippingInfo(ListingFormError):
    """非自提时配送信息不完整"""

    def __init__(self, fields: list, message: str = "Please fill in all shipping information"):
        super().__init__(message, {"fields": list(fields)})
        self.fields = list(fields)


class InvalidNumber(ListingFormError):
    """数值字段无法解析"""

    def __init__(self, field: str, value: str):
        super().__init__(f"Please enter a valid number for {field}", {"field": field, "value": value})
        self.field = field
        self.value = value


class StoreRejected(ListingFormError):
    """存储端拒绝或失败，原样携带其错误信息"""
    pass


class RegistrationIncomplete(BookBuddiesError):
    """卖家注册信息不完整"""

    def __init__(self, fields: list,
                 message: str = "Please fill in all required fields and upload both photos"):
        super().__init__(message, {"fields": list(fields)})
        self.fields = list(fields)
