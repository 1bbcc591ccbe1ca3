"""Per-sender conversation memory and lead state, both backed by TTL stores."""

from __future__ import annotations

import asyncio
import dataclasses
import logging
import time

from leadbot.leads.extractor import extract_fields

from .models import LeadState, MessageTurn, Role
from .ttl import Clock, TTLStore

logger = logging.getLogger("leadbot.memory")


@dataclasses.dataclass(slots=True)
class ConversationRecord:
    turns: list[MessageTurn] = dataclasses.field(default_factory=list)


class ConversationMemory:
    """Bounded, time-boxed dialogue history per sender."""

    def __init__(
        self,
        ttl_seconds: float = 30 * 60,
        max_turns: int = 8,
        clock: Clock = time.monotonic,
    ) -> None:
        self.max_turns = max_turns
        self._records: TTLStore[ConversationRecord] = TTLStore(ttl_seconds, clock)

    def _record(self, sender_id: str) -> ConversationRecord:
        record = self._records.get(sender_id, touch=True)
        if record is None:
            record = ConversationRecord()
            self._records.put(sender_id, record)
        return record

    def get_turns(self, sender_id: str) -> list[MessageTurn]:
        """Return a copy of the sender's turns, oldest first."""

        with self._records.lock:
            return list(self._record(sender_id).turns)

    def append_turn(self, sender_id: str, role: Role, text: str) -> None:
        if not sender_id or not text:
            return
        with self._records.lock:
            record = self._record(sender_id)
            record.turns.append(MessageTurn(role=role, content=text))
            if len(record.turns) > self.max_turns:
                del record.turns[: len(record.turns) - self.max_turns]
            self._records.touch(sender_id)

    def peek_turns(self, sender_id: str) -> list[MessageTurn]:
        """Return the sender's turns without creating or refreshing the record."""

        record = self._records.get(sender_id)
        return list(record.turns) if record is not None else []

    def reset(self, sender_id: str) -> bool:
        return self._records.delete(sender_id)

    def senders(self) -> list[str]:
        return sorted(self._records.keys())


class LeadStateStore:
    """Per-sender lead slots; a filled slot is never overwritten by extraction."""

    def __init__(self, ttl_seconds: float = 60 * 60, clock: Clock = time.monotonic) -> None:
        self._states: TTLStore[LeadState] = TTLStore(ttl_seconds, clock)

    def get_state(self, sender_id: str) -> LeadState:
        with self._states.lock:
            state = self._states.get(sender_id)
            if state is None:
                state = LeadState()
                self._states.put(sender_id, state)
            return dataclasses.replace(state)

    def peek(self, sender_id: str) -> LeadState | None:
        """Return the sender's state without creating or refreshing it."""

        state = self._states.get(sender_id)
        return dataclasses.replace(state) if state is not None else None

    def apply_extraction(self, sender_id: str, utterance: str) -> LeadState:
        with self._states.lock:
            current = self._states.get(sender_id) or LeadState()
            extracted = extract_fields(current, utterance)
            updates = {
                name: value
                for name, value in extracted.filled().items()
                if not getattr(current, name)
            }
            merged = dataclasses.replace(current, **updates)
            self._states.put(sender_id, merged)
            if updates:
                logger.debug("Lead slots filled sender=%s slots=%s", sender_id, sorted(updates))
            return dataclasses.replace(merged)

    def reset(self, sender_id: str) -> bool:
        return self._states.delete(sender_id)


class SenderLocks:
    """One asyncio lock per sender so a sender's turns run one at a time."""

    def __init__(self, ttl_seconds: float = 60 * 60, clock: Clock = time.monotonic) -> None:
        self._locks: TTLStore[asyncio.Lock] = TTLStore(ttl_seconds, clock)

    def for_sender(self, sender_id: str) -> asyncio.Lock:
        with self._locks.lock:
            lock = self._locks.get(sender_id, touch=True)
            if lock is None:
                lock = asyncio.Lock()
                self._locks.put(sender_id, lock)
            return lock
