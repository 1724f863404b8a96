"""
卖家注册表单
Seller Registration Form

平铺字段记录，固定的必填/选填划分，提交给注册受理方
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from bookbuddies.core.error_handler import BookBuddiesError, RegistrationIncomplete
from bookbuddies.core.logger import get_logger
from bookbuddies.modules.interfaces import ISellerRegistry
from bookbuddies.modules.listing.models import PickResult

REGISTRATION_FIELDS = (
    "first_name",
    "last_name",
    "age",
    "email",
    "id_card",
    "passport_number",
    "mobile_number",
    "nationality",
    "gender",
    "address",
    "street",
    "city",
    "state",
    "postal_code",
    "country",
    "id_card_photo",
    "current_photo",
)

OPTIONAL_FIELDS = ("address", "id_card", "passport_number")

REQUIRED_FIELDS = tuple(name for name in REGISTRATION_FIELDS if name not in OPTIONAL_FIELDS)

PHOTO_FIELDS = {
    "id_card": "id_card_photo",
    "current": "current_photo",
}


@dataclass
class RegistrationResult:
    """注册提交结果"""
    success: bool
    application_id: str | None = None
    message: str = ""
    error: BookBuddiesError | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "application_id": self.application_id,
            "message": self.message,
            "error": self.error.to_dict() if self.error else None,
        }


@dataclass
class SellerRegistrationForm:
    """卖家注册表单，照片字段保存图片选择器返回的 URI"""

    data: dict[str, Any] = field(default_factory=lambda: {
        name: (None if name in PHOTO_FIELDS.values() else "") for name in REGISTRATION_FIELDS
    })

    def __post_init__(self):
        self.logger = get_logger()

    def set_field(self, name: str, value: Any) -> None:
        if name not in REGISTRATION_FIELDS:
            raise ValueError(f"Unknown registration field: {name}")
        self.data[name] = value

    def attach_photo(self, kind: str, result: PickResult) -> None:
        """
        记录证件照或本人照

        Args:
            kind: id_card 或 current
            result: 图片选择结果，取消时不改动
        """
        if kind not in PHOTO_FIELDS:
            raise ValueError(f"Unknown photo kind: {kind}")
        if result.canceled:
            return
        self.data[PHOTO_FIELDS[kind]] = result.uri

    def validate(self) -> list[str]:
        """返回缺失的必填字段，空列表表示通过"""
        missing = []
        for name in REQUIRED_FIELDS:
            value = self.data.get(name)
            if value is None or (isinstance(value, str) and not value.strip()):
                missing.append(name)
        return missing

    async def submit(self, registry: ISellerRegistry) -> RegistrationResult:
        """
        校验并提交注册申请

        Args:
            registry: 注册受理方

        Returns:
            RegistrationResult
        """
        missing = self.validate()
        if missing:
            error = RegistrationIncomplete(missing)
            self.logger.info(f"Seller registration incomplete: {', '.join(missing)}")
            return RegistrationResult(success=False, message=error.message, error=error)

        try:
            result = await registry.submit_application(dict(self.data))
        except Exception as e:
            self.logger.error(f"Seller registration failed: {e}")
            return RegistrationResult(
                success=False,
                message="Failed to submit registration. Please try again.",
                error=BookBuddiesError(str(e)),
            )

        if result.success:
            self.logger.success(f"Seller application submitted: {result.application_id}")
        return result
