"""
session_store.py
================
In-memory owner of live conversations for the Flask shell.

Each browser gets a random chat id (kept in the signed Flask session
cookie); every (chat id, variant) pair owns exactly one Conversation.
Nothing is persisted: idle conversations are evicted and a restart
forgets everything, which is the same lifetime as a page mount.

Public API
----------
ConversationStore(idle_seconds, max_sessions, clock)
ConversationStore.checkout(chat_id, variant)   -> context manager yielding Conversation
ConversationStore.discard(chat_id, variant)    -> bool
ConversationStore.evict_idle()                 -> int
"""

from __future__ import annotations

import logging
import threading
import time
from contextlib import contextmanager
from typing import Callable, Iterator

from conversation_engine import VARIANTS, Conversation, create_conversation

logger = logging.getLogger(__name__)


class _Slot:
    __slots__ = ("conversation", "lock", "last_seen")

    def __init__(self, conversation: Conversation, now: float):
        self.conversation = conversation
        self.lock         = threading.Lock()
        self.last_seen    = now


class ConversationStore:
    """Thread-safe map of live conversations with idle eviction."""

    def __init__(
        self,
        idle_seconds: float = 1800.0,
        max_sessions: int = 1000,
        clock: Callable[[], float] = time.monotonic,
        factory: Callable[..., Conversation] = create_conversation,
    ):
        if idle_seconds <= 0:
            raise ValueError("idle_seconds must be positive.")
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1.")
        self.idle_seconds = idle_seconds
        self.max_sessions = max_sessions
        self._clock   = clock
        self._factory = factory
        self._slots: dict = {}
        self._lock    = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._slots)

    def _slot(self, chat_id: str, variant: str) -> _Slot:
        if variant not in VARIANTS:
            raise ValueError(f"Unknown chat variant '{variant}'.")
        key = (chat_id, variant)
        now = self._clock()
        with self._lock:
            slot = self._slots.get(key)
            if slot is None:
                self._evict_locked(now)
                if len(self._slots) >= self.max_sessions:
                    # Conversations checked out by an in-flight request are never dropped.
                    idle = [k for k, s in self._slots.items() if not s.lock.locked()]
                    if idle:
                        oldest = min(idle, key=lambda k: self._slots[k].last_seen)
                        del self._slots[oldest]
                        logger.info("store full, dropped oldest conversation %s/%s", *oldest)
                    else:
                        logger.warning("store full and every conversation is busy; growing past %d",
                                       self.max_sessions)
                slot = _Slot(self._factory(variant), now)
                self._slots[key] = slot
                logger.info("new %s conversation for chat %s", variant, chat_id)
            slot.last_seen = now
            return slot

    @contextmanager
    def checkout(self, chat_id: str, variant: str) -> Iterator[Conversation]:
        """
        Yield the conversation for (*chat_id*, *variant*), creating it on
        first use.  Due replies are delivered before it is handed out.
        Raises ValueError for an unknown variant.
        """
        slot = self._slot(chat_id, variant)
        with slot.lock:
            slot.conversation.pump()
            yield slot.conversation

    def discard(self, chat_id: str, variant: str) -> bool:
        with self._lock:
            removed = self._slots.pop((chat_id, variant), None) is not None
        if removed:
            logger.info("discarded %s conversation for chat %s", variant, chat_id)
        return removed

    def evict_idle(self) -> int:
        with self._lock:
            return self._evict_locked(self._clock())

    def _evict_locked(self, now: float) -> int:
        stale = [k for k, s in self._slots.items() if now - s.last_seen > self.idle_seconds]
        for key in stale:
            del self._slots[key]
        if stale:
            logger.info("evicted %d idle conversation(s)", len(stale))
        return len(stale)
