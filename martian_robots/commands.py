from __future__ import annotations

from enum import Enum

from martian_robots.errors import IllegalCommand


class Command(str, Enum):
    """
    Closed instruction vocabulary.
    Adding a command means adding a member here and a branch in engine.step_robot().
    """

    LEFT = "L"
    RIGHT = "R"
    FORWARD = "F"

    @classmethod
    def parse(cls, char: str) -> Command:
        try:
            return cls(char)
        except ValueError as e:
            raise IllegalCommand(f"illegal command {char!r}") from e

