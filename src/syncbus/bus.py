"""Single-producer, multi-consumer polling bus.

``Bus`` is the producer: pass it around to send values. ``Bus.subscribe()``
hands out a ``BusReader``; every reader gets its own copy of each value sent
while it is registered and drains them with ``poll()`` as part of an update
loop::

    bus = Bus(10)
    reader = bus.subscribe()

    bus.send("a")
    bus.send("b")

    assert reader.poll() == ["a", "b"]

Values should be small immutable data (ints, strings, enums, tuples, frozen
dataclasses). Nothing here is thread-safe.
"""
from __future__ import annotations

import weakref
from typing import Any, Iterator, List, Optional

from .logging_config import get_logger, set_level
from .models import BusStats
from .registry import Registry
from .settings import Settings

logger = get_logger(__name__)


class BusReader:
    """Consumer side of a bus.

    A reader stays registered until ``close()`` is called, the ``with`` block
    exits, or the object is garbage collected. Readers that are simply dropped
    are deregistered by a finalizer; under CPython that happens as soon as the
    last reference goes away.
    """

    def __init__(self, registry: Registry, index: int):
        self._registry = registry
        self._index = index
        self._finalizer = weakref.finalize(self, registry.release, index)

    def __repr__(self) -> str:
        state = "closed" if self.closed else "active"
        return f"<BusReader index={self._index} {state}>"

    def __enter__(self) -> "BusReader":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def __iter__(self) -> Iterator[Any]:
        """Iterate over one poll(). This drains the queue, including via ``in`` and ``list()``."""
        return iter(self.poll())

    @property
    def index(self) -> int:
        return self._index

    @property
    def closed(self) -> bool:
        return not self._finalizer.alive

    @property
    def pending(self) -> int:
        if self.closed:
            return 0
        return self._registry.pending(self._index)

    def poll(self) -> List[Any]:
        """Receive the pending values (if any) and empty the queue."""
        if self.closed:
            return []
        return self._registry.drain(self._index)

    def close(self) -> None:
        if self.closed:
            return
        self._registry.deregister(self._index)
        self._finalizer.detach()


class Bus:
    """Producer side of a bus.

    Use ``subscribe()`` to create a reader and ``send(value)`` to push a value
    into every reader's queue.
    """

    def __init__(self, capacity: Optional[int] = None, *, settings: Optional[Settings] = None):
        settings = settings or Settings()
        if capacity is None:
            capacity = settings.capacity
        self._registry = Registry(capacity, copy_values=settings.copy_values)
        set_level(settings.log_level)
        logger.debug(f"Bus created with capacity hint {capacity}")

    def __repr__(self) -> str:
        return f"<Bus readers={self.reader_count}>"

    @property
    def reader_count(self) -> int:
        return len(self._registry)

    def subscribe(self) -> BusReader:
        """Create a reader; it receives copies of every value sent until closed."""
        return BusReader(self._registry, self._registry.register())

    def send(self, value: Any) -> int:
        """Push a value into every reader queue. Returns the number of readers reached."""
        return self._registry.broadcast(value)

    def stats(self) -> BusStats:
        return self._registry.stats()
