"""
书籍记录存储
Listing Stores

提供内存与 JSON 文件两种存储实现
"""

from __future__ import annotations

import asyncio
import json
import uuid
from pathlib import Path
from threading import Lock
from typing import Any

from bookbuddies.core.error_handler import StorageError, log_execution_time
from bookbuddies.core.logger import get_logger
from bookbuddies.modules.interfaces import IListingStore
from bookbuddies.modules.listing.models import Listing, StoreResult, SubmissionPayload


def new_listing_id() -> str:
    return f"book_{uuid.uuid4().hex[:12]}"


class InMemoryListingStore(IListingStore):
    """进程内存储，用于测试与演示。"""

    def __init__(self):
        self._listings: dict[str, Listing] = {}
        self.logger = get_logger()

    async def create(self, payload: SubmissionPayload) -> StoreResult:
        listing = Listing.from_payload(new_listing_id(), payload)
        self._listings[listing.id] = listing
        return StoreResult(success=True, listing=listing)

    async def update(self, listing_id: str, payload: SubmissionPayload) -> StoreResult:
        current = self._listings.get(listing_id)
        if current is None:
            return StoreResult(success=False, error_message=f"Listing not found: {listing_id}")
        listing = Listing.from_payload(listing_id, payload, created_at=current.created_at)
        self._listings[listing_id] = listing
        return StoreResult(success=True, listing=listing)

    async def get(self, listing_id: str) -> Listing | None:
        return self._listings.get(listing_id)

    async def list_listings(self, limit: int = 50) -> list[Listing]:
        ordered = sorted(self._listings.values(), key=lambda item: item.updated_at, reverse=True)
        return ordered[:limit]


class JsonListingStore(IListingStore):
    """基于 JSON 文件的书籍记录存储，写入时先写临时文件再替换。"""

    def __init__(self, path: str = "data/listings.json", max_records: int = 5000):
        self.path = Path(path)
        self.max_records = int(max_records) if int(max_records) > 0 else 5000
        self._lock = Lock()
        self.logger = get_logger()
        self.path.parent.mkdir(parents=True, exist_ok=True)

    @log_execution_time()
    async def create(self, payload: SubmissionPayload) -> StoreResult:
        listing = Listing.from_payload(new_listing_id(), payload)
        try:
            await asyncio.to_thread(self._insert, listing)
        except StorageError as e:
            return StoreResult(success=False, error_message=e.message)

        self.logger.info(f"Stored new listing {listing.id}")
        return StoreResult(success=True, listing=listing)

    @log_execution_time()
    async def update(self, listing_id: str, payload: SubmissionPayload) -> StoreResult:
        try:
            listing = await asyncio.to_thread(self._replace, listing_id, payload)
        except StorageError as e:
            return StoreResult(success=False, error_message=e.message)

        if listing is None:
            return StoreResult(success=False, error_message=f"Listing not found: {listing_id}")

        self.logger.info(f"Updated listing {listing_id}")
        return StoreResult(success=True, listing=listing)

    async def get(self, listing_id: str) -> Listing | None:
        data = await asyncio.to_thread(self._read_all)
        record = data.get(str(listing_id).strip())
        return Listing.from_dict(record) if isinstance(record, dict) else None

    async def list_listings(self, limit: int = 50) -> list[Listing]:
        data = await asyncio.to_thread(self._read_all)
        listings = [Listing.from_dict(record) for record in data.values() if isinstance(record, dict)]
        listings.sort(key=lambda item: item.updated_at, reverse=True)
        return listings[:limit]

    def _insert(self, listing: Listing) -> None:
        with self._lock:
            data = self._load_all()
            data[listing.id] = listing.to_dict()
            self._save_all(self._prune_if_needed(data))

    def _replace(self, listing_id: str, payload: SubmissionPayload) -> Listing | None:
        with self._lock:
            data = self._load_all()
            record = data.get(listing_id)
            if not isinstance(record, dict):
                return None
            current = Listing.from_dict(record)
            listing = Listing.from_payload(listing_id, payload, created_at=current.created_at)
            data[listing_id] = listing.to_dict()
            self._save_all(data)
        return listing

    def _read_all(self) -> dict[str, Any]:
        with self._lock:
            return self._load_all()

    def _load_all(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        raw = self.path.read_text(encoding="utf-8").strip()
        if not raw:
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise StorageError(f"Corrupt listing store: {self.path}", {"error": str(e)})
        if not isinstance(data, dict):
            raise StorageError(f"Corrupt listing store: {self.path}")
        return data

    def _save_all(self, data: dict[str, Any]) -> None:
        temp_path = self.path.with_suffix(f"{self.path.suffix}.tmp")
        temp_path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
        temp_path.replace(self.path)

    def _prune_if_needed(self, data: dict[str, Any]) -> dict[str, Any]:
        if len(data) <= self.max_records:
            return data
        ordered = sorted(
            data.items(),
            key=lambda item: str(item[1].get("updated_at") or "") if isinstance(item[1], dict) else "",
            reverse=True,
        )
        return dict(ordered[: self.max_records])
