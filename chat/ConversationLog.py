# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-07
# Description: ConversationLog
# -----------------------------------------------------------------------------
import threading
from collections import OrderedDict, deque
from typing import Deque, List, Optional

from document.InvoiceRecord import ChatMessage


class ConversationLog:
    """
    In-memory, append-only transcripts keyed by conversation id.

    Each transcript keeps the most recent `max_messages` entries, and at
    most `max_conversations` transcripts are kept. Appending to a
    conversation makes it the most recent one; the least recently used
    conversation is evicted first.
    """

    def __init__(self, max_messages: int = 200, max_conversations: int = 1000):
        if max_conversations < 1:
            raise ValueError("max_conversations must be >= 1")
        self.max_messages = max_messages
        self.max_conversations = max_conversations
        self._conversations: "OrderedDict[str, Deque[ChatMessage]]" = OrderedDict()
        self._lock = threading.Lock()

    def append(self, conversation_id: str, message: ChatMessage) -> None:
        with self._lock:
            transcript = self._conversations.get(conversation_id)
            if transcript is None:
                transcript = deque(maxlen=self.max_messages)
                self._conversations[conversation_id] = transcript
                while len(self._conversations) > self.max_conversations:
                    self._conversations.popitem(last=False)
            else:
                self._conversations.move_to_end(conversation_id)
            transcript.append(message)

    def get(self, conversation_id: str) -> Optional[List[ChatMessage]]:
        with self._lock:
            transcript = self._conversations.get(conversation_id)
            return list(transcript) if transcript is not None else None

    def __len__(self) -> int:
        with self._lock:
            return len(self._conversations)
