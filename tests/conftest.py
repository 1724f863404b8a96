"""
测试工具和fixtures
Test Utilities and Fixtures
"""

import tempfile
from pathlib import Path
from unittest.mock import AsyncMock, Mock

import pytest

from bookbuddies.core.config import Config
from bookbuddies.core.logger import Logger


@pytest.fixture
def temp_dir():
    """创建临时目录"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_config_file(temp_dir):
    """创建临时配置文件"""
    config_file = temp_dir / "config.yaml"
    config_content = f"""
app:
  name: "bookbuddies"
  version: "1.0.0"
  debug: true
  log_level: "DEBUG"

listing:
  default_category: "Science"
  default_shipping_method: "Express"
  currency: "USD"

storage:
  listings_path: "{(temp_dir / 'listings.json').as_posix()}"
  sellers_path: "{(temp_dir / 'sellers.json').as_posix()}"
  max_records: 100

support:
  auto_reply_delay: 0.01
  max_message_length: 20
"""
    config_file.write_text(config_content)
    return config_file


@pytest.fixture
def config(temp_config_file):
    """测试配置实例"""
    config = Config(str(temp_config_file))
    yield config


@pytest.fixture
def logger(temp_dir, config):
    """测试日志实例"""
    logger = Logger()
    yield logger


@pytest.fixture
def mock_store():
    """Mock 书籍存储端"""
    store = Mock()
    store.create = AsyncMock()
    store.update = AsyncMock()
    store.get = AsyncMock(return_value=None)
    store.list_listings = AsyncMock(return_value=[])
    return store


@pytest.fixture
def sample_listing():
    """示例已存储书籍"""
    return create_mock_listing()


@pytest.fixture
def sample_seller_data():
    """示例卖家注册数据"""
    return {
        "first_name": "Ada",
        "last_name": "Lovelace",
        "age": "36",
        "email": "ada@example.com",
        "mobile_number": "+44 20 7946 0000",
        "nationality": "British",
        "gender": "female",
        "street": "12 St James's Square",
        "city": "London",
        "state": "Greater London",
        "postal_code": "SW1Y 4JH",
        "country": "United Kingdom",
        "id_card_photo": "file:///photos/id.jpg",
        "current_photo": "file:///photos/me.jpg",
    }


def create_mock_listing(**kwargs):
    """创建已存储书籍对象"""
    from bookbuddies.modules.listing.models import Category, Listing, ShippingInfo, ShippingMethod

    defaults = {
        "id": "book_test_id",
        "title": "Dune",
        "author": "Frank Herbert",
        "price": 12.5,
        "description": "Classic science fiction, lightly used",
        "category": Category.FICTION,
        "image": "file:///covers/dune.jpg",
        "shipping": ShippingInfo(
            method=ShippingMethod.STANDARD,
            cost=4.99,
            address="221B Baker Street",
            city="London",
            postal_code="NW1 6XE",
        ),
    }
    defaults.update(kwargs)

    return Listing(**defaults)


def create_store_result(success=True, **kwargs):
    """创建存储结果"""
    from bookbuddies.modules.listing.models import StoreResult

    defaults = {
        "success": success,
        "listing": create_mock_listing() if success else None,
        "error_message": None if success else "Test error",
    }
    defaults.update(kwargs)

    return StoreResult(**defaults)


def fill_valid_draft(controller, **overrides):
    """填写一份可通过校验的草稿"""
    fields = {
        "title": "Dune",
        "author": "Herbert",
        "price_text": "12.5",
        "description": "classic",
    }
    shipping = {
        "method": "Standard",
        "address": "1 Main St",
        "city": "Springfield",
        "postal_code": "12345",
    }
    for name, value in overrides.items():
        if name in shipping or name == "cost_text":
            shipping[name] = value
        else:
            fields[name] = value
    for name, value in fields.items():
        controller.set_field(name, value)
    for name, value in shipping.items():
        controller.set_shipping_field(name, value)
    return controller
