"""Append-only event journal kept by each ledger component."""

from typing import Any, TypeVar

from stability.core.logging import get_logger
from stability.core.pagination import window
from stability.models.events import Event

E = TypeVar("E", bound=Event)

log = get_logger(__name__)


class EventJournal:
    def __init__(self, source: str):
        self.source = source
        self._records: list[Event] = []

    def __len__(self) -> int:
        return len(self._records)

    def emit(self, event_cls: type[E], **fields: Any) -> E:
        """Append an event; rolled back together with its component on failure."""
        event = event_cls(seq=len(self._records), **fields)
        self._records.append(event)
        log.debug("event", source=self.source, **event.model_dump())
        return event

    @property
    def records(self) -> tuple[Event, ...]:
        return tuple(self._records)

    def find(self, name: str | None = None, limit: int = 50, offset: int = 0) -> tuple[list[Event], int]:
        """Newest first; returns (page, total matching)."""
        matching = [e for e in reversed(self._records) if name is None or e.name == name]
        return window(matching, limit, offset), len(matching)

    def snapshot(self) -> int:
        return len(self._records)

    def restore(self, mark: int) -> None:
        del self._records[mark:]
