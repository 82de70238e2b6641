# entry store: users and journal entries keyed by integer id
# Storage is the contract, MemStorage the process-local implementation.
# ids come from per-kind counters and are never reused, even after deletes.

import asyncio
import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Optional

from app.models.journal import JournalEntry, JournalEntryCreate
from app.models.user import User, UserCreate

logger = logging.getLogger(__name__)

# fields owned by the store, never touched by an update
IMMUTABLE_ENTRY_FIELDS = frozenset({"id", "user_id", "date"})


def count_words(content: Optional[str]) -> int:
    """number of non-empty whitespace-delimited tokens"""
    if not content:
        return 0
    return len(content.split())


def _newest_first(entries: list[JournalEntry]) -> list[JournalEntry]:
    # date descending, ties broken by id descending so ordering is total
    return sorted(entries, key=lambda e: (e.date, e.id), reverse=True)


class Storage(ABC):
    """storage operations used by the journal service"""

    # users

    @abstractmethod
    async def create_user(self, data: UserCreate) -> User: ...

    @abstractmethod
    async def get_user(self, user_id: int) -> Optional[User]: ...

    @abstractmethod
    async def get_user_by_username(self, username: str) -> Optional[User]: ...

    # journal entries

    @abstractmethod
    async def create_journal_entry(self, data: JournalEntryCreate) -> JournalEntry: ...

    @abstractmethod
    async def get_journal_entry(self, entry_id: int) -> Optional[JournalEntry]: ...

    @abstractmethod
    async def update_journal_entry(self, entry_id: int, updates: dict[str, Any]) -> Optional[JournalEntry]: ...

    @abstractmethod
    async def get_journal_entries_by_user_id(self, user_id: int) -> list[JournalEntry]: ...

    @abstractmethod
    async def get_recent_journal_entries(self, user_id: int, limit: int) -> list[JournalEntry]: ...

    @abstractmethod
    async def delete_journal_entry(self, entry_id: int) -> bool: ...


class MemStorage(Storage):
    """in-memory store, resets on restart.

    records are handed out as copies so callers can't mutate stored state.
    map and counter mutations happen under a single lock.
    """

    def __init__(self):
        self._users: dict[int, User] = {}
        self._entries: dict[int, JournalEntry] = {}
        self._next_user_id = 1
        self._next_entry_id = 1
        self._lock = asyncio.Lock()

    async def create_user(self, data: UserCreate) -> User:
        async with self._lock:
            user = User(id=self._next_user_id, username=data.username, password=data.password)
            self._next_user_id += 1
            self._users[user.id] = user
        logger.info(f"User created: {user.id} ({user.username})")
        return user.model_copy()

    async def get_user(self, user_id: int) -> Optional[User]:
        user = self._users.get(user_id)
        return user.model_copy() if user else None

    async def get_user_by_username(self, username: str) -> Optional[User]:
        for user in self._users.values():
            if user.username == username:
                return user.model_copy()
        return None

    async def create_journal_entry(self, data: JournalEntryCreate) -> JournalEntry:
        async with self._lock:
            entry = JournalEntry(
                id=self._next_entry_id,
                date=datetime.now(timezone.utc),
                mood=data.mood,
                content=data.content,
                user_id=data.user_id,
                sentiment=None,
                energy=None,
                word_count=count_words(data.content),
            )
            self._next_entry_id += 1
            self._entries[entry.id] = entry
        return entry.model_copy()

    async def get_journal_entry(self, entry_id: int) -> Optional[JournalEntry]:
        entry = self._entries.get(entry_id)
        return entry.model_copy() if entry else None

    async def update_journal_entry(self, entry_id: int, updates: dict[str, Any]) -> Optional[JournalEntry]:
        changes = {k: v for k, v in updates.items() if k not in IMMUTABLE_ENTRY_FIELDS}
        async with self._lock:
            entry = self._entries.get(entry_id)
            if entry is None:
                return None
            updated = entry.model_copy(update=changes)
            self._entries[entry_id] = updated
        return updated.model_copy()

    async def get_journal_entries_by_user_id(self, user_id: int) -> list[JournalEntry]:
        entries = [e for e in self._entries.values() if e.user_id == user_id]
        return [e.model_copy() for e in _newest_first(entries)]

    async def get_recent_journal_entries(self, user_id: int, limit: int) -> list[JournalEntry]:
        if limit <= 0:
            return []
        entries = await self.get_journal_entries_by_user_id(user_id)
        return entries[:limit]

    async def delete_journal_entry(self, entry_id: int) -> bool:
        async with self._lock:
            return self._entries.pop(entry_id, None) is not None


async def seed_default_user(store: Storage, username: str, password: str) -> User:
    """create the seed user, skips if the username already exists"""
    existing = await store.get_user_by_username(username)
    if existing:
        logger.info(f"Seed user already exists: {username} (id: {existing.id})")
        return existing
    return await store.create_user(UserCreate(username=username, password=password))
