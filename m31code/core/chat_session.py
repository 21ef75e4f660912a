# m31code/core/chat_session.py
"""
In-memory chat transcript and the message protocol spoken by chat views.

Views send ``{"type": "sendMessage", "message": ...}`` and receive
``{"type": "response" | "error", "message": ...}``. Nothing is persisted.
"""

import logging
import time
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Optional

from m31code.core.ai_service import AIService
from m31code.core.errors import M31CodeError

logger = logging.getLogger(__name__)

MessageType = Literal["user", "assistant", "error"]

CHAT_FAILURE_TEXT = "Failed to get response"


# ----------------------------------------------------------------------
# Message model
# ----------------------------------------------------------------------

@dataclass
class Message:
    """One entry of the chat transcript."""
    content: str
    type: MessageType
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    timestamp: int = field(default_factory=lambda: int(time.time() * 1000))


# ----------------------------------------------------------------------
# Chat session
# ----------------------------------------------------------------------

class ChatSession:
    """Routes chat messages through an AIService and records the exchange."""

    def __init__(self, service: AIService):
        self.service = service
        self.messages: List[Message] = []

    def _record(self, content: str, type_: MessageType) -> Message:
        message = Message(content=content, type=type_)
        self.messages.append(message)
        logger.debug(f"Added message: type={type_}, content_len={len(content)}")
        return message

    async def send(self, text: str) -> Message:
        """
        Send a user message and return the assistant (or error) entry.

        Service errors are turned into an ``error`` entry; the user text
        is recorded as typed, before sanitization.
        """
        self._record(text, "user")
        try:
            reply = await self.service.chat(text)
        except M31CodeError as e:
            logger.warning(f"Chat request failed: {e}")
            return self._record(CHAT_FAILURE_TEXT, "error")
        return self._record(reply, "assistant")

    async def handle_event(self, event: Dict[str, Any]) -> Optional[Dict[str, str]]:
        """
        Handle one event posted by a chat view.

        Returns:
            Outbound event, or None for event types this session ignores
        """
        if event.get("type") != "sendMessage":
            return None
        message = await self.send(str(event.get("message", "")))
        if message.type == "error":
            return {"type": "error", "message": message.content}
        return {"type": "response", "message": message.content}

    def clear(self) -> None:
        """Drop the transcript."""
        self.messages.clear()
