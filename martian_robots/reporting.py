from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from martian_robots.events import Event, EventType
from martian_robots.models import Robot

_STEP_EVENTS = {
    EventType.ROBOT_TURNED,
    EventType.ROBOT_MOVED,
    EventType.MOVE_ABSORBED,
    EventType.ROBOT_LOST,
}


def format_robot(robot: Robot) -> str:
    """Result line: '<x> <y> <facing>', with ' LOST' appended for a fallen robot."""
    line = f"{robot.position.x} {robot.position.y} {robot.facing.value}"
    if robot.lost:
        line += " LOST"
    return line


def render_results(lines: Iterable[str]) -> str:
    out = "\n".join(lines)
    return out + "\n" if out else ""


@dataclass(frozen=True, slots=True)
class RobotRow:
    """
    One robot's span of the event stream, ROBOT_PLACED -> ROBOT_FINISHED.
    """
    robot: int
    events: tuple[Event, ...]


def derive_robot_rows(events: Iterable[Event]) -> list[RobotRow]:
    """
    Group an ordered event stream into per-robot rows.

    World-level events (robot=None) are not attached to any row. A row is
    only emitted once its ROBOT_FINISHED event has been seen.
    """
    rows: list[RobotRow] = []
    buffer: list[Event] = []
    current: int | None = None

    for e in events:
        if e.robot is None:
            continue
        if e.type == EventType.ROBOT_PLACED:
            buffer = [e]
            current = e.robot
            continue
        if current is None or e.robot != current:
            continue

        buffer.append(e)
        if e.type == EventType.ROBOT_FINISHED:
            rows.append(RobotRow(robot=current, events=tuple(buffer)))
            buffer = []
            current = None

    return rows


def _fmt_state(data: dict) -> str:
    return f"{data.get('x')} {data.get('y')} {data.get('facing')}"


def render_trace(events: Iterable[Event]) -> str:
    """
    Human-readable step trace, one block per robot:

      Robot #1 start 1 1 E (8 commands)
        1: R -> 1 1 S
        ...
        = 1 1 E
    """
    out: list[str] = []
    for row in derive_robot_rows(events):
        placed = row.events[0]
        out.append(
            f"Robot #{row.robot + 1} start {_fmt_state(placed.data)} "
            f"({placed.data.get('commands', 0)} commands)"
        )
        step = 0
        for e in row.events[1:]:
            if e.type in _STEP_EVENTS:
                step += 1
                note = ""
                if e.type == EventType.MOVE_ABSORBED:
                    note = "  (scent: stayed)"
                elif e.type == EventType.ROBOT_LOST:
                    note = "  (fell: LOST)"
                out.append(f"  {step}: {e.data.get('command')} -> {_fmt_state(e.data)}{note}")
            elif e.type == EventType.COMMANDS_SKIPPED:
                out.append(f"  skipped {e.data.get('count')} remaining command(s)")
            elif e.type == EventType.ROBOT_FINISHED:
                out.append(f"  = {e.data.get('result')}")
        out.append("")

    if not out:
        return "(No robots were simulated.)\n"
    return "\n".join(out).rstrip() + "\n"
