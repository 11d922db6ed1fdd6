"""
conversation_engine.py
======================
Chat session state and turn sequencing for the two assistant variants.

  widget   – sidebar FAQ widget; every submission goes to chatbot_engine.match
  landing  – landing-page assistant; asks for a name, tells a joke, then
             answers through chatbot_engine.resolve_scripted_query

Bot replies are delivered through a TaskScheduler after a short random
"typing" delay.  Submissions are queued: a reply is only scheduled once the
previous one has landed, so replies always arrive in submission order and
``is_typing`` stays True until the queue is empty.

Landing-page states
-------------------
    AWAITING_NAME  --submit-->  GREETED  --joke, prompt-->  AWAITING_QUERY  (loops)

Public API
----------
WidgetConversation(scheduler=None, rng=None)
LandingConversation(scheduler=None, rng=None)
create_conversation(variant, **kwargs)       -> Conversation
Conversation.open() / close() / toggle()
Conversation.submit(raw_text=None)           -> Message | None
Conversation.quick_action(query)             -> Message | None
Conversation.pump()                          -> int
Conversation.snapshot()                      -> dict
"""

from __future__ import annotations

import itertools
import logging
import random
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Callable, Optional

from chatbot_engine import match, resolve_scripted_query
from faq_knowledge import JOKES, NAME_GREETING, NAME_PROMPT, QUERY_PROMPT, WIDGET_GREETING
from task_scheduler import TaskScheduler

logger = logging.getLogger(__name__)

# ── Scripted beat timings (seconds) ───────────────────────────────────────────
NAME_PROMPT_DELAY = 0.5
JOKE_DELAY        = 1.5
PROMPT_DELAY      = 2.0


class Sender(str, Enum):
    USER = "user"
    BOT  = "bot"


class ChatStep(str, Enum):
    AWAITING_NAME  = "awaiting_name"
    GREETED        = "greeted"
    AWAITING_QUERY = "awaiting_query"


@dataclass(frozen=True)
class Message:
    id:        int
    sender:    Sender
    text:      str
    timestamp: datetime

    def to_dict(self) -> dict:
        return {
            "id":        self.id,
            "sender":    self.sender.value,
            "text":      self.text,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass
class ConversationSession:
    messages:     list = field(default_factory=list)
    is_open:      bool = False
    is_typing:    bool = False
    input_buffer: str  = ""


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Conversation:
    """Shared controller logic; subclasses decide how a submission is answered."""

    variant = "base"
    reply_delay: tuple = (0.8, 1.2)

    def __init__(
        self,
        scheduler: Optional[TaskScheduler] = None,
        rng: Optional[random.Random] = None,
        now: Callable[[], datetime] = _utc_now,
    ):
        self.scheduler = scheduler or TaskScheduler()
        self.rng       = rng or random.Random()
        self.session   = ConversationSession()
        self._now      = now
        self._ids      = itertools.count(1)
        self._pending: deque = deque()
        self._busy     = False
        self._greeting_scheduled = False

    # ── Read-only views ──────────────────────────────────────────────────────
    @property
    def messages(self) -> list:
        return list(self.session.messages)

    @property
    def is_open(self) -> bool:
        return self.session.is_open

    @property
    def is_typing(self) -> bool:
        return self.session.is_typing

    # ── Visibility ───────────────────────────────────────────────────────────
    def open(self) -> None:
        if self.session.is_open:
            return
        self.session.is_open = True
        logger.info("%s chat opened", self.variant)
        if not self.session.messages and not self._greeting_scheduled:
            self._greeting_scheduled = True
            self._seed_greeting()

    def close(self) -> None:
        # Pending replies still land while closed.
        if self.session.is_open:
            self.session.is_open = False
            logger.info("%s chat closed", self.variant)

    def toggle(self) -> None:
        if self.session.is_open:
            self.close()
        else:
            self.open()

    # ── Turns ────────────────────────────────────────────────────────────────
    def submit(self, raw_text: Optional[str] = None) -> Optional[Message]:
        """
        Append the user's message and queue the bot reply.

        Uses the input buffer when *raw_text* is None.  Blank input is
        ignored and returns None.
        """
        text = self.session.input_buffer if raw_text is None else raw_text
        stripped = (text or "").strip()
        if not stripped:
            return None

        msg = self._append(Sender.USER, text)
        self.session.input_buffer = ""
        self.session.is_typing = True
        self._pending.append(stripped)
        if not self._busy:
            self._schedule_next()
        return msg

    def quick_action(self, query: str) -> Optional[Message]:
        self.session.input_buffer = query
        return self.submit()

    def pump(self) -> int:
        """Deliver every reply whose typing delay has elapsed."""
        return self.scheduler.run_due()

    def snapshot(self) -> dict[str, Any]:
        return {
            "variant":   self.variant,
            "is_open":   self.session.is_open,
            "is_typing": self.session.is_typing,
            "messages":  [m.to_dict() for m in self.session.messages],
        }

    # ── Internals ────────────────────────────────────────────────────────────
    def _append(self, sender: Sender, text: str) -> Message:
        # Replies delivered by a late pump are stamped with the time their timer fired.
        stamp = self._now() - timedelta(seconds=self.scheduler.lag())
        msg = Message(next(self._ids), sender, text, stamp)
        self.session.messages.append(msg)
        return msg

    def _bot(self, text: str) -> Message:
        return self._append(Sender.BOT, text)

    def _schedule_next(self) -> None:
        if not self._pending:
            self._busy = False
            self.session.is_typing = False
            return
        self._busy = True
        text  = self._pending.popleft()
        delay = self.rng.uniform(*self.reply_delay)
        self.scheduler.call_later(delay, self._respond, text)

    def _seed_greeting(self) -> None:
        raise NotImplementedError

    def _respond(self, text: str) -> None:
        raise NotImplementedError


class WidgetConversation(Conversation):
    """Sidebar widget: generic FAQ matcher from the first turn."""

    variant = "widget"
    reply_delay = (0.8, 1.2)

    def _seed_greeting(self) -> None:
        self._bot(WIDGET_GREETING)

    def _respond(self, text: str) -> None:
        self._bot(match(text, rng=self.rng))
        self._schedule_next()


class LandingConversation(Conversation):
    """Landing-page assistant with the name / joke onboarding script."""

    variant = "landing"
    reply_delay = (0.6, 1.2)

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.step      = ChatStep.AWAITING_NAME
        self.user_name = ""

    def snapshot(self) -> dict[str, Any]:
        data = super().snapshot()
        data["step"]      = self.step.value
        data["user_name"] = self.user_name or None
        return data

    def _seed_greeting(self) -> None:
        self.scheduler.call_later(NAME_PROMPT_DELAY, self._prompt_for_name)

    def _prompt_for_name(self) -> None:
        self._bot(NAME_PROMPT)

    def _respond(self, text: str) -> None:
        if self.step is ChatStep.AWAITING_NAME:
            self._capture_name(text)
            return
        self._bot(resolve_scripted_query(text, self.user_name))
        self._schedule_next()

    def _capture_name(self, name: str) -> None:
        self.user_name = name
        self.step = ChatStep.GREETED
        logger.info("landing chat: captured name, step=%s", self.step.value)
        self._bot(NAME_GREETING.format(user_name=name))
        self.scheduler.call_later(JOKE_DELAY, self._tell_joke)

    def _tell_joke(self) -> None:
        self._bot(self.rng.choice(JOKES))
        self.scheduler.call_later(PROMPT_DELAY, self._prompt_for_query)

    def _prompt_for_query(self) -> None:
        self._bot(QUERY_PROMPT)
        self.step = ChatStep.AWAITING_QUERY
        logger.info("landing chat: step=%s", self.step.value)
        self._schedule_next()


VARIANTS = {
    WidgetConversation.variant:  WidgetConversation,
    LandingConversation.variant: LandingConversation,
}


def create_conversation(variant: str, **kwargs) -> Conversation:
    """Build a fresh conversation for *variant* ("widget" or "landing")."""
    try:
        cls = VARIANTS[variant]
    except KeyError:
        raise ValueError(f"Unknown chat variant '{variant}'.") from None
    return cls(**kwargs)
