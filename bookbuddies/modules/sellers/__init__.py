"""
卖家注册模块
Sellers Module
"""

from .registration import RegistrationResult, SellerRegistrationForm
from .registry import JsonSellerRegistry

__all__ = ["JsonSellerRegistry", "RegistrationResult", "SellerRegistrationForm"]
