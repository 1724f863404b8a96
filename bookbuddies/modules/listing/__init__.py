"""
书籍发布模块
Listing Module

提供发布表单校验、提交与记录存储
"""

from .form import ListingFormController
from .models import (
    Category,
    FormMode,
    Listing,
    ListingDraft,
    PickResult,
    ShippingInfo,
    ShippingMethod,
    StoreResult,
    SubmissionPayload,
    SubmitMode,
    SubmitResult,
    ValidationResult,
)
from .store import InMemoryListingStore, JsonListingStore

__all__ = [
    "Category",
    "FormMode",
    "InMemoryListingStore",
    "JsonListingStore",
    "Listing",
    "ListingDraft",
    "ListingFormController",
    "PickResult",
    "ShippingInfo",
    "ShippingMethod",
    "StoreResult",
    "SubmissionPayload",
    "SubmitMode",
    "SubmitResult",
    "ValidationResult",
]
