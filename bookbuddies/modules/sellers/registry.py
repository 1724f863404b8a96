"""
卖家申请存储
Seller Application Registry
"""

from __future__ import annotations

import asyncio
import json
import time
import uuid
from pathlib import Path
from threading import Lock
from typing import Any

from bookbuddies.core.error_handler import StorageError, log_execution_time
from bookbuddies.modules.interfaces import ISellerRegistry
from bookbuddies.modules.sellers.registration import RegistrationResult

STATUS_PENDING_REVIEW = "pending_review"


class JsonSellerRegistry(ISellerRegistry):
    """基于 JSON 文件的卖家申请记录，新申请一律待审核。"""

    def __init__(self, path: str = "data/seller_applications.json"):
        self.path = Path(path)
        self._lock = Lock()
        self.path.parent.mkdir(parents=True, exist_ok=True)

    @log_execution_time()
    async def submit_application(self, application: dict[str, Any]) -> RegistrationResult:
        application_id = f"seller_{uuid.uuid4().hex[:12]}"
        record = dict(application)
        record["status"] = STATUS_PENDING_REVIEW
        record["submitted_at"] = time.time()

        try:
            await asyncio.to_thread(self._insert, application_id, record)
        except StorageError as e:
            return RegistrationResult(
                success=False,
                message="Failed to submit registration. Please try again.",
                error=e,
            )

        return RegistrationResult(
            success=True,
            application_id=application_id,
            message="Your seller registration has been submitted for review",
        )

    def get(self, application_id: str) -> dict[str, Any]:
        with self._lock:
            record = self._load_all().get(str(application_id).strip(), {})
        return dict(record) if isinstance(record, dict) else {}

    def _insert(self, application_id: str, record: dict[str, Any]) -> None:
        with self._lock:
            data = self._load_all()
            data[application_id] = record
            self._save_all(data)

    def _load_all(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        raw = self.path.read_text(encoding="utf-8").strip()
        if not raw:
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise StorageError(f"Corrupt seller registry: {self.path}", {"error": str(e)})
        if not isinstance(data, dict):
            raise StorageError(f"Corrupt seller registry: {self.path}")
        return data

    def _save_all(self, data: dict[str, Any]) -> None:
        temp_path = self.path.with_suffix(f"{self.path.suffix}.tmp")
        temp_path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
        temp_path.replace(self.path)
