"""
书籍发布表单控制器
Listing Form Controller

持有发布草稿，按配送方式校验必填项，并将草稿提交给存储端
"""

import math
from typing import Any, Optional

from bookbuddies.core.error_handler import (
    InvalidNumber,
    MissingRequiredField,
    MissingShippingInfo,
    StoreRejected,
)
from bookbuddies.core.logger import get_logger
from bookbuddies.modules.interfaces import IListingStore
from bookbuddies.modules.listing.models import (
    Category,
    FormMode,
    Listing,
    ListingDraft,
    PickResult,
    ShippingDraft,
    ShippingInfo,
    ShippingMethod,
    SubmissionPayload,
    SubmitMode,
    SubmitResult,
    ValidationResult,
)

BOOK_FIELDS = ("title", "author", "price_text", "description", "category")
SHIPPING_FIELDS = ("method", "cost_text", "address", "city", "postal_code")

REQUIRED_BOOK_FIELDS = ("title", "author", "price_text", "description")
REQUIRED_SHIPPING_FIELDS = ("address", "city", "postal_code")


def parse_number(text: str) -> Optional[float]:
    """整串解析为有限数值，失败返回 None"""
    try:
        value = float(str(text).strip())
    except (TypeError, ValueError):
        return None
    return value if math.isfinite(value) else None


def format_number(value: Optional[float]) -> str:
    if value is None:
        return ""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


class ListingFormController:
    """
    书籍发布表单控制器

    草稿只通过本类的方法修改。模式在构造时确定：传入已有记录即为编辑模式，
    提交时调用 update，否则调用 create。校验规则在两种模式下相同。

    控制器不做并发互斥，调用方需在提交进行中禁用提交入口。
    """

    def __init__(self, store: IListingStore, existing: Optional[Listing] = None,
                 config: Optional[dict] = None):
        """
        初始化表单控制器

        Args:
            store: 书籍记录存储端
            existing: 待编辑的已有记录
            config: listing 配置段，提供新草稿的默认分类与配送方式
        """
        self.store = store
        self.config = config or {}
        self.logger = get_logger()

        self.draft = ListingDraft(
            category=Category(self.config.get("default_category", Category.FICTION.value)),
            shipping=self._default_shipping(),
        )
        self.existing_id: Optional[str] = None
        self.mode = FormMode.CREATING

        if existing is not None:
            self.load_from_existing(existing)
            self.mode = FormMode.EDITING

    def _default_shipping(self) -> ShippingDraft:
        return ShippingDraft(
            method=ShippingMethod(self.config.get("default_shipping_method", ShippingMethod.STANDARD.value))
        )

    def load_from_existing(self, listing: Listing) -> None:
        """用已有记录填充草稿，不做校验"""
        self.existing_id = listing.id
        self.draft.title = listing.title
        self.draft.author = listing.author
        self.draft.price_text = format_number(listing.price)
        self.draft.description = listing.description
        self.draft.category = Category(listing.category)
        self.draft.image_ref = listing.image

        shipping = listing.shipping
        if shipping is None:
            self.draft.shipping = self._default_shipping()
        else:
            self.draft.shipping = ShippingDraft(
                method=ShippingMethod(shipping.method),
                cost_text=format_number(shipping.cost),
                address=shipping.address or "",
                city=shipping.city or "",
                postal_code=shipping.postal_code or "",
            )

        self.logger.debug(f"Draft seeded from listing {listing.id}")

    def set_field(self, name: str, value: Any) -> None:
        """
        设置书籍字段

        Args:
            name: title / author / price_text / description / category
            value: 字段值，category 接受枚举或其显示名
        """
        if name not in BOOK_FIELDS:
            raise ValueError(f"Unknown listing field: {name}")

        if name == "category":
            try:
                value = Category(value)
            except ValueError:
                self.logger.warning(f"Ignoring unknown category: {value}")
                return
        else:
            value = "" if value is None else str(value)

        setattr(self.draft, name, value)

    def set_shipping_field(self, name: str, value: Any) -> None:
        """
        设置配送字段

        切换配送方式不会清空地址，来回切换时用户输入保持不变
        """
        if name not in SHIPPING_FIELDS:
            raise ValueError(f"Unknown shipping field: {name}")

        if name == "method":
            try:
                value = ShippingMethod(value)
            except ValueError:
                self.logger.warning(f"Ignoring unknown shipping method: {value}")
                return
        else:
            value = "" if value is None else str(value)

        setattr(self.draft.shipping, name, value)

    def attach_image(self, result: PickResult) -> None:
        """记录图片选择结果，取消时保持原图"""
        if result.canceled:
            return
        self.draft.image_ref = result.uri

    def validate(self) -> ValidationResult:
        """
        校验草稿

        每次只返回一个错误，顺序为：书籍必填项、配送信息、价格数值

        Returns:
            ValidationResult: 成功时携带提交载荷
        """
        draft = self.draft

        missing = [name for name in REQUIRED_BOOK_FIELDS if not getattr(draft, name).strip()]
        if missing:
            return ValidationResult(error=MissingRequiredField(missing))

        pickup = draft.shipping.method == ShippingMethod.LOCAL_PICKUP
        if not pickup:
            missing = [name for name in REQUIRED_SHIPPING_FIELDS if not getattr(draft.shipping, name).strip()]
            if missing:
                return ValidationResult(error=MissingShippingInfo(missing))

        price = parse_number(draft.price_text)
        if price is None:
            return ValidationResult(error=InvalidNumber("price", draft.price_text))

        if pickup:
            cost = 0.0
        else:
            cost = parse_number(draft.shipping.cost_text) or 0.0

        payload = SubmissionPayload(
            title=draft.title,
            author=draft.author,
            price=price,
            description=draft.description,
            category=draft.category,
            image=draft.image_ref,
            shipping=ShippingInfo(
                method=draft.shipping.method,
                cost=cost,
                address=draft.shipping.address,
                city=draft.shipping.city,
                postal_code=draft.shipping.postal_code,
            ),
        )
        return ValidationResult(payload=payload)

    async def submit(self, mode: Optional[SubmitMode] = None,
                     existing_id: Optional[str] = None) -> SubmitResult:
        """
        校验并提交草稿

        Args:
            mode: 存储操作，默认按表单模式决定
            existing_id: 更新目标ID，默认使用载入记录的ID

        Returns:
            SubmitResult: 存储后的记录，或校验/存储错误
        """
        validation = self.validate()
        if not validation.success:
            self.logger.info(f"Listing validation failed: {validation.error.message}")
            return SubmitResult(error=validation.error)

        if mode is None:
            mode = SubmitMode.UPDATE if self.mode == FormMode.EDITING else SubmitMode.CREATE
        target_id = existing_id or self.existing_id

        try:
            if mode == SubmitMode.UPDATE and target_id:
                self.logger.info(f"Updating listing {target_id}: {validation.payload.title}")
                result = await self.store.update(target_id, validation.payload)
            else:
                self.logger.info(f"Creating listing: {validation.payload.title}")
                result = await self.store.create(validation.payload)
        except Exception as e:
            self.logger.error(f"Listing store call failed: {e}")
            return SubmitResult(error=StoreRejected(str(e)))

        if not result.success:
            message = result.error_message or ""
            self.logger.warning(f"Listing rejected by store: {message}")
            return SubmitResult(error=StoreRejected(message))

        if result.listing is None:
            self.logger.warning("Listing store reported success without a listing")
            return SubmitResult(error=StoreRejected("Store returned no listing"))

        self.logger.success(f"Listing saved: {result.listing.id}")
        return SubmitResult(listing=result.listing)
