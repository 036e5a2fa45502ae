from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from martian_robots.events import Event, EventType


class EventSink(ABC):
    """
    Consumer of structured events.
    The engine must be able to run with event_sink=None (no events).
    """

    @abstractmethod
    def start_robot(self) -> int: ...

    @abstractmethod
    def finish_robot(self) -> None: ...

    @abstractmethod
    def emit(self, event_type: EventType, **data: Any) -> None: ...


@dataclass
class InMemoryEventSink(EventSink):
    """
    Simple sink for tests and the CLI.
    Owns robot/seq numbering: seq increases across the whole run, robot is
    set between start_robot() and finish_robot().
    """

    events: list[Event] = field(default_factory=list)
    _robot: int | None = field(default=None, init=False)
    _robots_started: int = field(default=0, init=False)
    _seq: int = field(default=0, init=False)

    @property
    def current_robot(self) -> int | None:
        return self._robot

    def start_robot(self) -> int:
        if self._robot is not None:
            raise RuntimeError("EventSink.finish_robot() must be called before starting another robot.")
        self._robot = self._robots_started
        self._robots_started += 1
        return self._robot

    def finish_robot(self) -> None:
        self._robot = None

    def emit(self, event_type: EventType, **data: Any) -> None:
        self._seq += 1
        self.events.append(
            Event(
                seq=self._seq,
                type=event_type,
                robot=self._robot,
                data=dict(data),
            )
        )

    def for_robot(self, index: int) -> list[Event]:
        return [e for e in self.events if e.robot == index]
