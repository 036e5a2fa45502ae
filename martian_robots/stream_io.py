from __future__ import annotations

import json
import re
import sys
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from martian_robots.compass import Compass
from martian_robots.errors import InputFormatError, MalformedInput, UnknownCompassPoint
from martian_robots.events import Event, EventType
from martian_robots.models import Coordinate

_LINE_BREAK = re.compile(r"\r\n|\r|\n")
_INT_TOKEN = re.compile(r"[+-]?[0-9]+")

# World line + one position line + one command line.
MIN_LINES = 3


@dataclass(frozen=True)
class RobotSpec:
    position: Coordinate
    facing: Compass
    # Raw command text; characters are only checked when executed, so anything
    # after the point where the robot falls is never looked at.
    commands: str = ""
    # 1-based physical lines of the position and command lines, for diagnostics.
    line: int = 0
    command_line: int = 0


@dataclass(frozen=True)
class Instructions:
    upper_right: Coordinate
    robots: list[RobotSpec] = field(default_factory=list)


def _content_lines(text: str) -> list[tuple[int, str]]:
    """Return (1-based line number, line) for every non-blank line."""
    return [
        (i, line)
        for i, line in enumerate(_LINE_BREAK.split(text), start=1)
        if line.strip()
    ]


def _parse_int(token: str, *, label: str, lineno: int) -> int:
    if not _INT_TOKEN.fullmatch(token):
        raise MalformedInput(f"line {lineno}: {label} must be an integer (got {token!r})")
    return int(token)


def parse_instructions(text: str) -> Instructions:
    """Parse and validate instruction text.

    Format:

      5 3            <- upper-right corner of the grid
      1 1 E          <- robot start: x y facing
      RFRFRFRF       <- robot commands (L/R/F)

      3 2 N          <- blank lines between robots are ignored
      FRRFLLFFRRFLL

    A final position line with no command line is a robot with no commands.
    Range checks (world size, starting positions) and command letters are
    the engine's job.
    """
    lines = _content_lines(text)
    if len(lines) < MIN_LINES:
        raise MalformedInput(
            f"expected at least {MIN_LINES} non-blank lines (world size, robot position, commands), "
            f"got {len(lines)}"
        )

    lineno, world_line = lines[0]
    tokens = world_line.split()
    if len(tokens) != 2:
        raise MalformedInput(f"line {lineno}: unable to parse world size: {world_line!r}")
    upper_right = Coordinate(
        _parse_int(tokens[0], label="world x", lineno=lineno),
        _parse_int(tokens[1], label="world y", lineno=lineno),
    )

    robots: list[RobotSpec] = []
    body = lines[1:]
    for i in range(0, len(body), 2):
        lineno, position_line = body[i]
        tokens = position_line.split()
        if len(tokens) != 3:
            raise MalformedInput(f"line {lineno}: unable to parse robot position: {position_line!r}")
        position = Coordinate(
            _parse_int(tokens[0], label="robot x", lineno=lineno),
            _parse_int(tokens[1], label="robot y", lineno=lineno),
        )
        try:
            facing = Compass.parse(tokens[2])
        except UnknownCompassPoint as e:
            raise UnknownCompassPoint(f"line {lineno}: {e}") from e

        commands = ""
        cmd_lineno = 0
        if i + 1 < len(body):
            cmd_lineno, command_line = body[i + 1]
            commands = command_line.strip()

        robots.append(
            RobotSpec(
                position=position,
                facing=facing,
                commands=commands,
                line=lineno,
                command_line=cmd_lineno,
            )
        )

    return Instructions(upper_right=upper_right, robots=robots)


def load_instructions(path: Path) -> str:
    """Read instruction text from a file, or from stdin when path is '-'."""
    if str(path) == "-":
        return sys.stdin.read()
    if not path.exists():
        raise InputFormatError(f"file not found: {path}")
    if not path.is_file():
        raise InputFormatError(f"not a file: {path}")
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise InputFormatError(f"not UTF-8 text: {path} ({e.reason})") from e
    except OSError as e:
        raise InputFormatError(f"cannot read {path}: {e.strerror or e}") from e


def dump_event_stream(events: list[Event]) -> list[dict[str, Any]]:
    """Return a JSON-serializable event stream."""
    raw: list[dict[str, Any]] = []
    for e in events:
        d = asdict(e)
        d["type"] = str(e.type.value)
        raw.append(d)
    return raw


def write_event_stream(events: list[Event], path: Path) -> None:
    path.write_text(json.dumps(dump_event_stream(events), indent=2) + "\n", encoding="utf-8")


def load_event_stream(path: Path) -> list[Event]:
    """Load and validate an ordered structured event stream from JSON."""

    if not path.exists():
        raise InputFormatError(f"file not found: {path}")
    if not path.is_file():
        raise InputFormatError(f"not a file: {path}")

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise InputFormatError(
            f"invalid JSON: {e.msg} (line {e.lineno}, col {e.colno})"
        ) from e

    if not isinstance(raw, list):
        raise InputFormatError("root must be a JSON array of events")

    events: list[Event] = []
    last_seq: int | None = None

    for i, item in enumerate(raw):
        if not isinstance(item, dict):
            raise InputFormatError(f"event[{i}] must be an object")

        seq = item.get("seq")
        etype = item.get("type")
        robot = item.get("robot", None)
        data = item.get("data", {})

        if not isinstance(seq, int) or seq < 1:
            raise InputFormatError(f"event[{i}].seq must be an int >= 1")
        if not isinstance(etype, str):
            raise InputFormatError(f"event[{i}].type must be a string")
        if robot is not None and (not isinstance(robot, int) or robot < 0):
            raise InputFormatError(f"event[{i}].robot must be an int >= 0 or null")
        if not isinstance(data, dict):
            raise InputFormatError(f"event[{i}].data must be an object")

        try:
            event_type = EventType(etype)
        except ValueError as e:
            raise InputFormatError(
                f"event[{i}].type is not a valid EventType: {etype!r}"
            ) from e

        if last_seq is not None and seq <= last_seq:
            raise InputFormatError(
                "events must be strictly increasing by seq; "
                f"event[{i}] has seq={seq} after {last_seq}"
            )
        last_seq = seq

        events.append(Event(seq=seq, type=event_type, robot=robot, data=data))

    return events
