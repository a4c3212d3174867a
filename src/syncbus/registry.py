from __future__ import annotations

import copy
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Iterator, List

from .errors import BusBusyError, InvalidCapacityError
from .logging_config import get_logger, log_delivery
from .models import BusStats

logger = get_logger(__name__)


@dataclass
class Slot:
    index: int
    queue: List[Any] = field(default_factory=list)


class Registry:
    """Shared broadcast state behind a bus and its readers.

    Slots are looked up by their index with a linear scan. Positions shift as
    readers leave while indices stay fixed, and the expected number of readers
    is small.
    """

    def __init__(self, capacity_hint: int, copy_values: bool = True):
        # bool is an int subclass but never a meaningful capacity
        if isinstance(capacity_hint, bool) or not isinstance(capacity_hint, int) or capacity_hint <= 2:
            logger.warning(f"Refusing bus capacity hint: {capacity_hint!r}")
            raise InvalidCapacityError(capacity_hint)
        self.capacity_hint = capacity_hint
        self.copy_values = copy_values
        self.slots: List[Slot] = []
        self.next_index = 0
        self._busy = False
        self._deferred: List[int] = []

    def __len__(self) -> int:
        return len(self.slots)

    @property
    def busy(self) -> bool:
        return self._busy

    @contextmanager
    def exclusive(self) -> Iterator[None]:
        """Hold the registry for one mutating operation; re-entry fails fast."""
        if self._busy:
            logger.warning("Re-entrant bus operation rejected")
            raise BusBusyError("bus is already in the middle of an operation")
        self._busy = True
        try:
            yield
        finally:
            # Releases fired while flushing are deferred and picked up by the same loop
            try:
                self._flush_deferred()
            finally:
                self._busy = False

    def register(self) -> int:
        with self.exclusive():
            index = self.next_index
            self.next_index += 1
            self.slots.append(Slot(index=index))
        logger.debug(f"Reader {index} registered ({len(self.slots)} live)")
        return index

    def broadcast(self, value: Any) -> int:
        with self.exclusive():
            # Duplicate everything first so a failing copy delivers nothing
            if self.copy_values:
                values = [copy.copy(value) for _ in self.slots]
            else:
                values = [value] * len(self.slots)
            for slot, v in zip(self.slots, values):
                slot.queue.append(v)
            delivered = len(values)
        log_delivery(logger, delivered, len(self.slots))
        return delivered

    def drain(self, index: int) -> List[Any]:
        with self.exclusive():
            for slot in self.slots:
                if slot.index == index:
                    out = slot.queue
                    slot.queue = []
                    return out
            return []

    def deregister(self, index: int) -> bool:
        with self.exclusive():
            removed = self._remove(index)
        if removed:
            logger.debug(f"Reader {index} deregistered ({len(self.slots)} live)")
        return removed

    def release(self, index: int) -> None:
        """Deregister from a finalizer, deferring if an operation is in progress."""
        if self._busy:
            logger.debug(f"Deferring release of reader {index}")
            self._deferred.append(index)
            return
        self.deregister(index)

    def pending(self, index: int) -> int:
        for slot in self.slots:
            if slot.index == index:
                return len(slot.queue)
        return 0

    def stats(self) -> BusStats:
        return BusStats(
            capacity_hint=self.capacity_hint,
            next_index=self.next_index,
            live_readers=len(self.slots),
            pending={s.index: len(s.queue) for s in self.slots},
        )

    def _remove(self, index: int) -> bool:
        before = len(self.slots)
        self.slots = [s for s in self.slots if s.index != index]
        return len(self.slots) != before

    def _flush_deferred(self) -> None:
        while self._deferred:
            index = self._deferred.pop()
            if self._remove(index):
                logger.debug(f"Reader {index} deregistered after deferral ({len(self.slots)} live)")
