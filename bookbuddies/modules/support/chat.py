"""
客服会话
Support Chat

维护与客服的消息记录，每条用户消息在固定延迟后追加一条自动回复
"""

from __future__ import annotations

import asyncio
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from bookbuddies.core.error_handler import ChatError
from bookbuddies.core.logger import get_logger

SENDER_USER = "user"
SENDER_SUPPORT = "other"


@dataclass
class ChatMessage:
    """会话消息"""
    id: str
    text: str
    sender: str
    timestamp: str

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "text": self.text, "sender": self.sender, "timestamp": self.timestamp}


class SupportChat:
    """
    客服会话

    自动回复以 asyncio 任务调度，发出后不取消；drain() 等待所有待发回复
    """

    def __init__(self, config: dict | None = None):
        self.config = config or {}
        self.logger = get_logger()
        self.greeting = str(self.config.get("greeting") or "Hello! How can I help you today?")
        self.auto_reply = str(
            self.config.get("auto_reply")
            or "Thank you for your message. Our support team will get back to you shortly."
        )
        self.reply_delay = float(self.config.get("auto_reply_delay", 1.0))
        self.max_length = int(self.config.get("max_message_length", 500))

        self._messages: list[ChatMessage] = [
            ChatMessage(id=uuid.uuid4().hex, text=self.greeting, sender=SENDER_SUPPORT, timestamp="Just now")
        ]
        self._pending: set[asyncio.Task] = set()

    @property
    def messages(self) -> list[ChatMessage]:
        return list(self._messages)

    def send_message(self, text: str) -> ChatMessage:
        """
        发送用户消息并安排自动回复

        必须在运行中的事件循环内调用

        Args:
            text: 消息内容

        Returns:
            追加的用户消息
        """
        cleaned = str(text or "").strip()
        if not cleaned:
            raise ChatError("Please enter a message")

        message = self._append(cleaned[: self.max_length], SENDER_USER)
        self.logger.debug(f"Support chat message queued, reply in {self.reply_delay:.1f}s")

        task = asyncio.get_running_loop().create_task(self._reply_later())
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return message

    async def drain(self) -> None:
        """等待所有已调度的自动回复落地"""
        while self._pending:
            await asyncio.gather(*list(self._pending))

    async def _reply_later(self) -> None:
        await asyncio.sleep(self.reply_delay)
        self._append(self.auto_reply, SENDER_SUPPORT)

    def _append(self, text: str, sender: str) -> ChatMessage:
        message = ChatMessage(
            id=uuid.uuid4().hex,
            text=text,
            sender=sender,
            timestamp=datetime.now().strftime("%H:%M"),
        )
        self._messages.append(message)
        return message
