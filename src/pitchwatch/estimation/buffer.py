"""Bounded newest-first history of observed ball positions."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterator
from typing import NamedTuple

from ..field_constants import Vec3

# Fixed by contract: the 5-cycle horizon needs five older samples.
BUFFER_CAPACITY = 6


class Sample(NamedTuple):
    """One observed ball position with its server time."""

    position: Vec3
    time: float


class SampleBuffer:
    """Newest-first ring of ball samples, oldest evicted past capacity."""

    def __init__(self) -> None:
        self._samples: deque[Sample] = deque(maxlen=BUFFER_CAPACITY)

    @property
    def capacity(self) -> int:
        return BUFFER_CAPACITY

    def push(self, position: Vec3, time: float) -> None:
        self._samples.appendleft(Sample(position, time))

    def iterate(self) -> Iterator[Sample]:
        """Yield samples from newest to oldest."""
        return iter(tuple(self._samples))

    def __iter__(self) -> Iterator[Sample]:
        return self.iterate()

    def __len__(self) -> int:
        return len(self._samples)

    @property
    def newest(self) -> Sample | None:
        return self._samples[0] if self._samples else None

    def clear(self) -> None:
        self._samples.clear()
