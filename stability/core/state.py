"""All-or-nothing state changes and the non-reentrant entry guard."""

import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from functools import wraps
from typing import Any, Iterator

from stability.core.exceptions import ReentrantCall


class Stateful(ABC):
    """A component whose mutable state can be captured and put back."""

    @abstractmethod
    def snapshot(self) -> Any:
        ...

    @abstractmethod
    def restore(self, state: Any) -> None:
        ...


@contextmanager
def atomic(*participants: Stateful) -> Iterator[None]:
    """Restore every participant if the block raises; the exception propagates."""
    saved = [(p, p.snapshot()) for p in participants]
    try:
        yield
    except BaseException:
        for p, state in reversed(saved):
            p.restore(state)
        raise


class ReentrancyGuard:
    """Two states, idle and in-call. Entering while in-call raises ReentrantCall."""

    def __init__(self) -> None:
        # non-blocking acquire is the atomic check-and-set
        self._lock = threading.Lock()

    @property
    def entered(self) -> bool:
        return self._lock.locked()

    def __enter__(self) -> "ReentrancyGuard":
        if not self._lock.acquire(blocking=False):
            raise ReentrantCall()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self._lock.release()
        return False


def non_reentrant(method):
    """Run a method under the owner's `_guard` and inside `atomic(*owner.participants())`."""

    @wraps(method)
    def wrapper(self, *args, **kwargs):
        with self._guard:
            with atomic(*self.participants()):
                return method(self, *args, **kwargs)

    return wrapper
