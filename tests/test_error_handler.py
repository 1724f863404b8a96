"""
异常处理单元测试
Error Handler Tests
"""

from unittest.mock import Mock

import pytest

from bookbuddies.core.error_handler import (
    BookBuddiesError,
    ChatError,
    ConfigError,
    InvalidNumber,
    ListingFormError,
    MissingRequiredField,
    MissingShippingInfo,
    RegistrationIncomplete,
    StorageError,
    StoreRejected,
    log_execution_time,
)


class TestLogExecutionTime:
    """执行时间装饰器测试"""

    @pytest.mark.asyncio
    async def test_async_success(self):
        logger = Mock()

        @log_execution_time(logger=logger)
        async def test_func():
            return "done"

        assert await test_func() == "done"
        logger.debug.assert_called_once()

    @pytest.mark.asyncio
    async def test_async_failure_is_logged_and_reraised(self):
        logger = Mock()

        @log_execution_time(logger=logger)
        async def test_func():
            raise StorageError("disk full")

        with pytest.raises(StorageError):
            await test_func()
        assert "disk full" in logger.error.call_args.args[0]

    def test_sync_function(self):
        logger = Mock()

        @log_execution_time(logger=logger)
        def test_func(x):
            return x * 2

        assert test_func(2) == 4
        assert test_func.__name__ == "test_func"


class TestErrors:
    """异常层级测试"""

    def test_base_error_to_dict(self):
        error = BookBuddiesError("boom", {"key": "value"})
        assert error.to_dict() == {
            "type": "BookBuddiesError",
            "message": "boom",
            "details": {"key": "value"},
        }

    @pytest.mark.parametrize("cls", [ConfigError, StorageError, ChatError, ListingFormError])
    def test_subclasses_share_base(self, cls):
        assert issubclass(cls, BookBuddiesError)

    def test_listing_form_errors(self):
        assert issubclass(MissingRequiredField, ListingFormError)
        assert issubclass(MissingShippingInfo, ListingFormError)
        assert issubclass(InvalidNumber, ListingFormError)
        assert issubclass(StoreRejected, ListingFormError)

    def test_missing_required_field_message(self):
        error = MissingRequiredField(["title", "author"])
        assert error.message == "Please fill in all required fields"
        assert error.to_dict()["details"] == {"fields": ["title", "author"]}

    def test_invalid_number_details(self):
        error = InvalidNumber("price", "abc")
        assert error.details == {"field": "price", "value": "abc"}

    def test_store_rejected_keeps_message_verbatim(self):
        assert StoreRejected("Title already listed").message == "Title already listed"

    def test_registration_incomplete(self):
        error = RegistrationIncomplete(["email"])
        assert error.fields == ["email"]
        assert "upload both photos" in error.message
