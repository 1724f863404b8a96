"""
书籍发布数据模型
Listing Models

定义草稿、提交载荷与已存储记录的数据结构
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from bookbuddies.core.error_handler import ListingFormError


class Category(str, Enum):
    """书籍分类"""
    FICTION = "Fiction"
    NON_FICTION = "Non-Fiction"
    SCIENCE = "Science"
    TECHNOLOGY = "Technology"
    ART_DESIGN = "Art & Design"
    BUSINESS = "Business"


class ShippingMethod(str, Enum):
    """配送方式"""
    STANDARD = "Standard"
    EXPRESS = "Express"
    LOCAL_PICKUP = "Local Pickup"


class FormMode(str, Enum):
    """表单模式，构造时确定"""
    CREATING = "creating"
    EDITING = "editing"


class SubmitMode(str, Enum):
    """提交时调用的存储操作"""
    CREATE = "create"
    UPDATE = "update"


@dataclass
class ShippingDraft:
    """配送信息草稿，数值字段保留原始输入"""
    method: ShippingMethod = ShippingMethod.STANDARD
    cost_text: str = ""
    address: str = ""
    city: str = ""
    postal_code: str = ""


@dataclass
class ListingDraft:
    """书籍发布草稿"""
    title: str = ""
    author: str = ""
    price_text: str = ""
    description: str = ""
    category: Category = Category.FICTION
    image_ref: Optional[str] = None
    shipping: ShippingDraft = field(default_factory=ShippingDraft)


@dataclass
class ShippingInfo:
    """规范化后的配送信息"""
    method: ShippingMethod
    cost: float = 0.0
    address: str = ""
    city: str = ""
    postal_code: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "method": self.method.value,
            "cost": self.cost,
            "address": self.address,
            "city": self.city,
            "postal_code": self.postal_code,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ShippingInfo":
        return cls(
            method=ShippingMethod(data.get("method") or ShippingMethod.STANDARD.value),
            cost=float(data.get("cost") or 0.0),
            address=data.get("address") or "",
            city=data.get("city") or "",
            postal_code=data.get("postal_code") or "",
        )


@dataclass
class SubmissionPayload:
    """校验通过后交给存储端的载荷"""
    title: str
    author: str
    price: float
    description: str
    category: Category
    shipping: ShippingInfo
    image: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "author": self.author,
            "price": self.price,
            "description": self.description,
            "category": self.category.value,
            "image": self.image,
            "shipping": self.shipping.to_dict(),
        }


@dataclass
class Listing:
    """
    已存储的书籍记录

    由存储端持有，字段与载荷一致并附带ID与时间戳；
    旧记录可能没有配送信息
    """
    id: str
    title: str
    author: str
    price: float
    description: str
    category: Category = Category.FICTION
    image: Optional[str] = None
    shipping: Optional[ShippingInfo] = None
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)

    @classmethod
    def from_payload(cls, listing_id: str, payload: SubmissionPayload,
                     created_at: Optional[datetime] = None) -> "Listing":
        now = datetime.now()
        return cls(
            id=listing_id,
            title=payload.title,
            author=payload.author,
            price=payload.price,
            description=payload.description,
            category=payload.category,
            image=payload.image,
            shipping=replace(payload.shipping),
            created_at=created_at or now,
            updated_at=now,
        )

    def to_payload(self) -> SubmissionPayload:
        return SubmissionPayload(
            title=self.title,
            author=self.author,
            price=self.price,
            description=self.description,
            category=self.category,
            image=self.image,
            shipping=replace(self.shipping) if self.shipping
            else ShippingInfo(method=ShippingMethod.STANDARD),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "author": self.author,
            "price": self.price,
            "description": self.description,
            "category": self.category.value,
            "image": self.image,
            "shipping": self.shipping.to_dict() if self.shipping else None,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Listing":
        shipping = data.get("shipping")
        now = datetime.now()
        return cls(
            id=str(data["id"]),
            title=data.get("title") or "",
            author=data.get("author") or "",
            price=float(data.get("price") or 0.0),
            description=data.get("description") or "",
            category=Category(data.get("category") or Category.FICTION.value),
            image=data.get("image"),
            shipping=ShippingInfo.from_dict(shipping) if isinstance(shipping, dict) else None,
            created_at=datetime.fromisoformat(data["created_at"]) if data.get("created_at") else now,
            updated_at=datetime.fromisoformat(data["updated_at"]) if data.get("updated_at") else now,
        )


@dataclass
class StoreResult:
    """存储端操作结果"""
    success: bool
    listing: Optional[Listing] = None
    error_message: Optional[str] = None
    timestamp: datetime = field(default_factory=datetime.now)


@dataclass
class PickResult:
    """图片选择结果，uri 为不透明引用"""
    canceled: bool = False
    uri: Optional[str] = None


@dataclass
class ValidationResult:
    """草稿校验结果，payload 与 error 二选一"""
    payload: Optional[SubmissionPayload] = None
    error: Optional[ListingFormError] = None

    @property
    def success(self) -> bool:
        return self.error is None


@dataclass
class SubmitResult:
    """提交结果，listing 与 error 二选一"""
    listing: Optional[Listing] = None
    error: Optional[ListingFormError] = None

    @property
    def success(self) -> bool:
        return self.error is None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "listing": self.listing.to_dict() if self.listing else None,
            "error": self.error.to_dict() if self.error else None,
        }
