"""Listener interface for downstream consumers of match events.

Events raised while a snapshot is processed are queued and only delivered
once the snapshot's state changes are complete. Listener code therefore
never runs in the middle of a registry update and may freely read the
registry or enqueue its own work.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from .statistics import Statistic
from .types import AgentState

logger = logging.getLogger(__name__)


@runtime_checkable
class StatisticsListener(Protocol):
    """Callbacks for discrete match events."""

    def goal_received(self, statistic: Statistic) -> None: ...

    def goal_kick_received(self, statistic: Statistic) -> None: ...

    def corner_kick_received(self, statistic: Statistic) -> None: ...

    def free_kick_received(self, statistic: Statistic) -> None: ...

    def kick_in_received(self, statistic: Statistic) -> None: ...

    def offside_received(self, statistic: Statistic) -> None: ...

    def foul_received(self, statistic: Statistic) -> None: ...

    def play_on_received(self) -> None: ...

    def dribble_start_received(self, dribbler: AgentState) -> None: ...

    def dribble_stop_received(self) -> None: ...


class BaseStatisticsListener:
    """No-op implementation; subclass and override what you need."""

    def goal_received(self, statistic: Statistic) -> None:
        pass

    def goal_kick_received(self, statistic: Statistic) -> None:
        pass

    def corner_kick_received(self, statistic: Statistic) -> None:
        pass

    def free_kick_received(self, statistic: Statistic) -> None:
        pass

    def kick_in_received(self, statistic: Statistic) -> None:
        pass

    def offside_received(self, statistic: Statistic) -> None:
        pass

    def foul_received(self, statistic: Statistic) -> None:
        pass

    def play_on_received(self) -> None:
        pass

    def dribble_start_received(self, dribbler: AgentState) -> None:
        pass

    def dribble_stop_received(self) -> None:
        pass


@dataclass(frozen=True)
class PendingEvent:
    """A listener callback waiting to be delivered."""

    callback: str
    args: tuple[Any, ...] = ()


class ListenerHub:
    """Registered listeners plus the queue of undelivered events."""

    def __init__(self) -> None:
        self._listeners: list[StatisticsListener] = []
        self._pending: deque[PendingEvent] = deque()

    def add(self, listener: StatisticsListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove(self, listener: StatisticsListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def __len__(self) -> int:
        return len(self._listeners)

    def enqueue(self, callback: str, *args: Any) -> None:
        if not hasattr(BaseStatisticsListener, callback):
            raise ValueError(f"Unknown listener callback: {callback}")
        self._pending.append(PendingEvent(callback, args))

    @property
    def pending(self) -> int:
        return len(self._pending)

    def clear(self) -> None:
        self._pending.clear()

    def dispatch(self) -> int:
        """Deliver queued events in order; returns how many were delivered.

        A failing listener is logged and skipped, the others still receive
        the event.
        """
        delivered = 0
        while self._pending:
            event = self._pending.popleft()
            for listener in tuple(self._listeners):
                handler = getattr(listener, event.callback, None)
                if handler is None:
                    continue
                try:
                    handler(*event.args)
                except Exception as e:
                    logger.warning(
                        f"Listener {type(listener).__name__}.{event.callback} failed: {e}",
                        exc_info=True,
                    )
            delivered += 1
        return delivered
