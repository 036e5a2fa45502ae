from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class EventType(str, Enum):
    """
    Event vocabulary for the simulation engine.
    Step events (TURNED/MOVED/ABSORBED/LOST) carry the robot state *after* the command.
    """

    RUN_START = "RUN_START"
    WORLD_CREATED = "WORLD_CREATED"
    ROBOT_PLACED = "ROBOT_PLACED"
    ROBOT_TURNED = "ROBOT_TURNED"
    ROBOT_MOVED = "ROBOT_MOVED"
    MOVE_ABSORBED = "MOVE_ABSORBED"
    ROBOT_LOST = "ROBOT_LOST"
    COMMANDS_SKIPPED = "COMMANDS_SKIPPED"
    ROBOT_FINISHED = "ROBOT_FINISHED"
    RUN_END = "RUN_END"


@dataclass(frozen=True, slots=True)
class Event:
    """
    A structured, orderable fact emitted by the engine (optionally).

    robot and seq are owned by the sink (so the engine remains stateless).
    robot is the 0-based input index, or None for world-level events.
    """

    seq: int
    type: EventType
    robot: int | None = None
    data: dict[str, Any] = field(default_factory=dict)
