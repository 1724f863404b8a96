"""
书籍记录存储测试
Listing Store Tests
"""

import asyncio
import json

import pytest

from conftest import create_mock_listing
from bookbuddies.core.error_handler import StoreRejected
from bookbuddies.modules.listing.form import ListingFormController
from bookbuddies.modules.listing.models import Listing, ShippingMethod
from bookbuddies.modules.listing.store import InMemoryListingStore, JsonListingStore


@pytest.fixture
def payload():
    return create_mock_listing().to_payload()


class TestInMemoryListingStore:

    @pytest.mark.asyncio
    async def test_create_assigns_id(self, payload):
        store = InMemoryListingStore()
        result = await store.create(payload)

        assert result.success
        assert result.listing.id.startswith("book_")
        assert result.listing.to_payload() == payload
        assert await store.get(result.listing.id) is result.listing

    @pytest.mark.asyncio
    async def test_update_keeps_created_at(self, payload):
        store = InMemoryListingStore()
        created = (await store.create(payload)).listing
        payload.price = 3.0

        result = await store.update(created.id, payload)

        assert result.success
        assert result.listing.price == 3.0
        assert result.listing.created_at == created.created_at

    @pytest.mark.asyncio
    async def test_update_unknown_id_fails(self, payload):
        result = await InMemoryListingStore().update("book_missing", payload)
        assert result.success is False
        assert result.error_message == "Listing not found: book_missing"


class TestJsonListingStore:

    @pytest.mark.asyncio
    async def test_create_persists_to_file(self, temp_dir, payload):
        path = temp_dir / "listings.json"
        store = JsonListingStore(str(path))

        result = await store.create(payload)

        data = json.loads(path.read_text(encoding="utf-8"))
        assert result.listing.id in data
        assert data[result.listing.id]["shipping"]["method"] == "Standard"

    @pytest.mark.asyncio
    async def test_reload_from_new_instance(self, temp_dir, payload):
        path = str(temp_dir / "listings.json")
        created = (await JsonListingStore(path).create(payload)).listing

        loaded = await JsonListingStore(path).get(created.id)

        assert isinstance(loaded, Listing)
        assert loaded.to_payload() == payload
        assert loaded.created_at == created.created_at

    @pytest.mark.asyncio
    async def test_update_and_list(self, temp_dir, payload):
        store = JsonListingStore(str(temp_dir / "listings.json"))
        first = (await store.create(payload)).listing
        await store.create(payload)
        payload.title = "Dune Messiah"

        result = await store.update(first.id, payload)
        listings = await store.list_listings()

        assert result.success
        assert len(listings) == 2
        assert listings[0].title == "Dune Messiah"
        assert len(await store.list_listings(limit=1)) == 1

    @pytest.mark.asyncio
    async def test_update_unknown_id_fails(self, temp_dir, payload):
        store = JsonListingStore(str(temp_dir / "listings.json"))
        result = await store.update("book_missing", payload)
        assert result.success is False

    @pytest.mark.asyncio
    async def test_corrupt_file_fails_without_overwriting(self, temp_dir, payload):
        path = temp_dir / "listings.json"
        path.write_text("{not json", encoding="utf-8")
        store = JsonListingStore(str(path))

        result = await store.create(payload)

        assert result.success is False
        assert "Corrupt listing store" in result.error_message
        assert path.read_text(encoding="utf-8") == "{not json"

    @pytest.mark.asyncio
    async def test_non_dict_file_fails_without_overwriting(self, temp_dir, payload):
        path = temp_dir / "listings.json"
        path.write_text("[]", encoding="utf-8")
        store = JsonListingStore(str(path))

        result = await store.update("book_x", payload)

        assert result.success is False
        assert "Corrupt listing store" in result.error_message
        assert path.read_text(encoding="utf-8") == "[]"

    @pytest.mark.asyncio
    async def test_concurrent_creates_all_persist(self, temp_dir, payload):
        path = temp_dir / "listings.json"
        store = JsonListingStore(str(path))

        results = await asyncio.gather(*(store.create(payload) for _ in range(5)))

        assert all(result.success for result in results)
        stored = json.loads(path.read_text(encoding="utf-8"))
        assert sorted(stored) == sorted(result.listing.id for result in results)
        assert len(await store.list_listings()) == 5

    @pytest.mark.asyncio
    async def test_prunes_oldest_records(self, temp_dir, payload):
        store = JsonListingStore(str(temp_dir / "listings.json"), max_records=2)
        for title in ("a", "b", "c"):
            payload.title = title
            await store.create(payload)

        titles = sorted(item.title for item in await store.list_listings())
        assert titles == ["b", "c"]

    @pytest.mark.asyncio
    async def test_legacy_record_without_shipping(self, temp_dir):
        path = temp_dir / "listings.json"
        path.write_text(json.dumps({
            "book_legacy": {"id": "book_legacy", "title": "Emma", "author": "Austen",
                            "price": 4, "description": "worn", "category": "Fiction"}
        }), encoding="utf-8")

        listing = await JsonListingStore(str(path)).get("book_legacy")

        assert listing.shipping is None
        assert listing.price == 4.0


class TestFormWithStore:
    """表单与真实存储的端到端流程"""

    @pytest.mark.asyncio
    async def test_create_then_edit(self, temp_dir):
        store = JsonListingStore(str(temp_dir / "listings.json"))

        controller = ListingFormController(store)
        for name, value in (("title", "Dune"), ("author", "Herbert"),
                            ("price_text", "12.5"), ("description", "classic")):
            controller.set_field(name, value)
        controller.set_shipping_field("method", "Local Pickup")
        created = await controller.submit()
        assert created.success

        editor = ListingFormController(store, existing=await store.get(created.listing.id))
        editor.set_shipping_field("method", "Express")
        rejected = await editor.submit()
        assert rejected.error.__class__.__name__ == "MissingShippingInfo"

        editor.set_shipping_field("address", "1 Main St")
        editor.set_shipping_field("city", "Springfield")
        editor.set_shipping_field("postal_code", "12345")
        editor.set_shipping_field("cost_text", "5")
        updated = await editor.submit()

        assert updated.success
        assert updated.listing.id == created.listing.id
        assert updated.listing.shipping.method == ShippingMethod.EXPRESS
        assert updated.listing.shipping.cost == 5.0
        assert len(await store.list_listings()) == 1

    @pytest.mark.asyncio
    async def test_editing_deleted_listing_is_rejected(self, temp_dir):
        store = JsonListingStore(str(temp_dir / "listings.json"))
        controller = ListingFormController(store, existing=create_mock_listing(id="book_gone"))

        result = await controller.submit()

        assert isinstance(result.error, StoreRejected)
        assert result.error.message == "Listing not found: book_gone"
