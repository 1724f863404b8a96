"""
功能模块
Modules

提供各业务领域的服务模块
"""

from .listing.form import ListingFormController
from .listing.models import Listing, SubmissionPayload, SubmitResult
from .listing.store import InMemoryListingStore, JsonListingStore
from .sellers.registration import SellerRegistrationForm
from .sellers.registry import JsonSellerRegistry
from .support.chat import SupportChat

__all__ = [
    "InMemoryListingStore",
    "JsonListingStore",
    "JsonSellerRegistry",
    "Listing",
    "ListingFormController",
    "SellerRegistrationForm",
    "SubmissionPayload",
    "SubmitResult",
    "SupportChat",
]
