"""
Storage abstraction for events and users, with an in-memory implementation.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import asdict, dataclass, fields, replace
from datetime import date, datetime
from typing import Dict, Optional, Protocol

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Base class for storage failures."""


class DuplicateUsernameError(StorageError):
    def __init__(self, username: str):
        super().__init__(f"Username already exists: {username}")
        self.username = username


@dataclass
class EventRecord:
    id: str
    title: str
    date: str
    dateTime: str
    time: str = ""
    description: str = ""

    def as_dict(self) -> dict:
        return asdict(self)


@dataclass
class UserRecord:
    id: str
    username: str
    password: str

    def as_dict(self) -> dict:
        return asdict(self)


_EVENT_FIELDS = frozenset(f.name for f in fields(EventRecord)) - {"id"}


class Storage(Protocol):
    """Operations the API needs from the record store."""

    def get_user(self, user_id: str) -> Optional[UserRecord]:
        ...

    def get_user_by_username(self, username: str) -> Optional[UserRecord]:
        ...

    def create_user(self, data: dict) -> UserRecord:
        ...

    def get_events(self) -> list[EventRecord]:
        ...

    def get_events_on(self, day: date) -> list[EventRecord]:
        ...

    def get_event(self, event_id: str) -> Optional[EventRecord]:
        ...

    def create_event(self, data: dict) -> EventRecord:
        ...

    def update_event(self, event_id: str, data: dict) -> Optional[EventRecord]:
        ...

    def delete_event(self, event_id: str) -> bool:
        ...


class InMemoryStorage:
    """Process-local store. Records live as long as the instance does."""

    def __init__(self):
        self.users: Dict[str, UserRecord] = {}
        self.events: Dict[str, EventRecord] = {}

    @staticmethod
    def _new_id(existing: dict) -> str:
        record_id = str(uuid.uuid4())
        while record_id in existing:
            record_id = str(uuid.uuid4())
        return record_id

    def reset(self) -> None:
        """Clear all stored data (useful in tests)."""
        self.users.clear()
        self.events.clear()

    def get_user(self, user_id: str) -> Optional[UserRecord]:
        user = self.users.get(user_id)
        return replace(user) if user else None

    def get_user_by_username(self, username: str) -> Optional[UserRecord]:
        for user in self.users.values():
            if user.username == username:
                return replace(user)
        return None

    def create_user(self, data: dict) -> UserRecord:
        if self.get_user_by_username(data["username"]) is not None:
            raise DuplicateUsernameError(data["username"])
        user = UserRecord(
            id=self._new_id(self.users),
            username=data["username"],
            password=data["password"],
        )
        self.users[user.id] = user
        logger.debug("Created user %s", user.id)
        return replace(user)

    def get_events(self) -> list[EventRecord]:
        ordered = sorted(self.events.values(), key=lambda event: event.dateTime)
        return [replace(event) for event in ordered]

    def get_events_on(self, day: date) -> list[EventRecord]:
        return [
            event
            for event in self.get_events()
            if datetime.fromisoformat(event.dateTime).date() == day
        ]

    def get_event(self, event_id: str) -> Optional[EventRecord]:
        event = self.events.get(event_id)
        return replace(event) if event else None

    def create_event(self, data: dict) -> EventRecord:
        values = {key: value for key, value in data.items() if key in _EVENT_FIELDS}
        event = EventRecord(
            id=self._new_id(self.events),
            title=values["title"],
            date=values["date"],
            dateTime=values["dateTime"],
            time=values.get("time") or "",
            description=values.get("description") or "",
        )
        self.events[event.id] = event
        logger.debug("Created event %s at %s", event.id, event.dateTime)
        return replace(event)

    def update_event(self, event_id: str, data: dict) -> Optional[EventRecord]:
        existing = self.events.get(event_id)
        if not existing:
            return None
        changes = {key: value for key, value in data.items() if key in _EVENT_FIELDS}
        updated = replace(existing, **changes)
        self.events[event_id] = updated
        return replace(updated)

    def delete_event(self, event_id: str) -> bool:
        removed = self.events.pop(event_id, None) is not None
        if removed:
            logger.debug("Deleted event %s", event_id)
        return removed
