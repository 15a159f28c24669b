# chat.py
import logging
from typing import Awaitable, Callable, Optional, Sequence, Set

from .errors import ChatPendingError, ChatRejectedError, EntryNotFoundError
from .models import AnalysisResult, ChatMessage, ChatRole, EntryStatus
from .store import PipelineStore

logger = logging.getLogger(__name__)

ChatFn = Callable[[AnalysisResult, Sequence[ChatMessage], str], Awaitable[str]]

FALLBACK_REPLY = "Sorry, I encountered an error analyzing the resume context."


class ChatSessionAdapter:
    """
    Per-candidate conversation about an analyzed resume.

    Every accepted user message is answered by exactly one assistant message:
    the model's reply, or a fixed apology when the call fails.
    """

    def __init__(self, store: PipelineStore, chat: ChatFn):
        self.store = store
        self.chat = chat
        self._pending: Set[str] = set()

    def is_awaiting(self, entry_id: str) -> bool:
        return entry_id in self._pending

    @property
    def pending_ids(self) -> Set[str]:
        return set(self._pending)

    def _append(self, entry_id: str, message: ChatMessage) -> bool:
        entry = self.store.get(entry_id)
        if entry is None:
            return False
        self.store.update_entry(entry_id, conversation=entry.conversation + (message,))
        return True

    async def send_message(self, entry_id: str, text: str) -> Optional[ChatMessage]:
        entry = self.store.get(entry_id)
        if entry is None:
            raise EntryNotFoundError(entry_id)
        if not text or not text.strip():
            raise ChatRejectedError("Message is empty.")
        if entry.status != EntryStatus.COMPLETED or entry.result is None:
            raise ChatRejectedError("Chat is only available for analyzed candidates.")
        if entry_id in self._pending:
            raise ChatPendingError("Still waiting for the previous reply.")

        self._append(entry_id, ChatMessage(role=ChatRole.USER, text=text))
        self._pending.add(entry_id)
        try:
            history = self.store.get(entry_id).conversation
            try:
                reply_text = await self.chat(entry.result, history, text)
            except Exception as e:
                logger.error("!!! Chat call failed for %s: %s", entry.label, e)
                reply_text = FALLBACK_REPLY
            reply = ChatMessage(role=ChatRole.ASSISTANT, text=reply_text)
            if not self._append(entry_id, reply):
                logger.info("Entry %s was removed before its chat reply arrived", entry_id)
                return None
            return reply
        finally:
            self._pending.discard(entry_id)
