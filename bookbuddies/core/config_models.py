"""
配置模型与验证
Configuration Models and Validation

使用Pydantic进行配置验证
"""

from typing import Optional, Dict, Any
from pydantic import BaseModel, Field, validator


class AppConfig(BaseModel):
    """应用配置模型"""
    name: str = Field(default="bookbuddies", description="应用名称")
    version: str = Field(default="1.0.0", description="版本号")
    debug: bool = Field(default=False, description="调试模式")
    log_level: str = Field(default="INFO", description="日志级别")
    data_dir: str = Field(default="data", description="数据目录")
    logs_dir: str = Field(default="logs", description="日志目录")

    @validator("log_level")
    def validate_log_level(cls, v):
        """验证日志级别"""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}, got {v}")
        return v


class ListingConfig(BaseModel):
    """发布表单配置模型"""
    default_category: str = Field(default="Fiction", description="新建草稿的默认分类")
    default_shipping_method: str = Field(default="Standard", description="新建草稿的默认配送方式")
    currency: str = Field(default="USD", description="价格币种")


class StorageConfig(BaseModel):
    """本地存储配置模型"""
    listings_path: str = Field(default="data/listings.json", description="书籍发布记录文件")
    sellers_path: str = Field(default="data/seller_applications.json", description="卖家申请记录文件")
    max_records: int = Field(default=5000, ge=1, le=100000, description="单文件最大记录数")


class SupportConfig(BaseModel):
    """客服会话配置模型"""
    greeting: str = Field(default="Hello! How can I help you today?", description="开场白")
    auto_reply: str = Field(
        default="Thank you for your message. Our support team will get back to you shortly.",
        description="自动回复文案"
    )
    auto_reply_delay: float = Field(default=1.0, ge=0.0, le=60.0, description="自动回复延迟（秒）")
    max_message_length: int = Field(default=500, ge=1, le=5000, description="单条消息最大长度")


class ConfigModel(BaseModel):
    """完整配置模型"""
    app: AppConfig = Field(default_factory=AppConfig)
    listing: ListingConfig = Field(default_factory=ListingConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    support: SupportConfig = Field(default_factory=SupportConfig)

    @validator("listing")
    def validate_listing_defaults(cls, v):
        """默认分类与配送方式必须是枚举值"""
        from bookbuddies.modules.listing.models import Category, ShippingMethod

        Category(v.default_category)
        ShippingMethod(v.default_shipping_method)
        return v

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典"""
        return self.model_dump()

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'ConfigModel':
        """从字典创建配置"""
        return cls(**(data or {}))
