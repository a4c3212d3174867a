from __future__ import annotations

from pydantic import BaseModel, Field, computed_field
from typing import Dict


class BusStats(BaseModel):
    capacity_hint: int
    next_index: int
    live_readers: int

    # reader index -> number of values waiting to be polled
    pending: Dict[int, int] = Field(default_factory=dict)

    @computed_field
    @property
    def total_pending(self) -> int:
        return sum(self.pending.values())
