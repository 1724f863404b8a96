"""
服务接口抽象层
Service Interface Layer

定义表单控制器依赖的外部协作方接口
"""

from abc import ABC, abstractmethod
from typing import Any


class IListingStore(ABC):
    """书籍发布记录存储接口定义。"""

    @abstractmethod
    async def create(self, payload: Any) -> Any:
        """
        新建书籍记录

        Args:
            payload: 校验通过的提交载荷

        Returns:
            StoreResult: 成功时携带分配了ID的记录，失败时携带错误信息
        """
        pass

    @abstractmethod
    async def update(self, listing_id: str, payload: Any) -> Any:
        """
        更新已有书籍记录

        Args:
            listing_id: 记录ID
            payload: 校验通过的提交载荷

        Returns:
            StoreResult: 更新后的记录或错误信息
        """
        pass

    @abstractmethod
    async def get(self, listing_id: str) -> Any | None:
        """
        按ID读取记录

        Args:
            listing_id: 记录ID

        Returns:
            Listing 或 None
        """
        pass

    @abstractmethod
    async def list_listings(self, limit: int = 50) -> list[Any]:
        """
        列出最近更新的记录

        Args:
            limit: 返回数量限制

        Returns:
            Listing 列表
        """
        pass


class ISellerRegistry(ABC):
    """卖家注册申请接收接口定义。"""

    @abstractmethod
    async def submit_application(self, application: dict[str, Any]) -> Any:
        """
        提交卖家注册申请

        Args:
            application: 注册表单字段字典

        Returns:
            RegistrationResult: 是否受理及申请ID
        """
        pass
