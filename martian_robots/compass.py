from __future__ import annotations

from enum import Enum

from martian_robots.errors import UnknownCompassPoint


class Compass(str, Enum):
    """
    Robot facing. Member order is the clockwise cycle N -> E -> S -> W -> N.

    Rotations are modular steps over that order:
      - rotate_right() advances one step (clockwise)
      - rotate_left() retreats one step (counter-clockwise)
    """

    N = "N"
    E = "E"
    S = "S"
    W = "W"

    @classmethod
    def parse(cls, token: str) -> Compass:
        try:
            return cls(token)
        except ValueError as e:
            raise UnknownCompassPoint(f"compass point {token!r} unknown") from e

    def _turn(self, steps: int) -> Compass:
        order = list(Compass)
        return order[(order.index(self) + steps) % len(order)]

    def rotate_left(self) -> Compass:
        return self._turn(-1)

    def rotate_right(self) -> Compass:
        return self._turn(1)

    def forward(self) -> tuple[int, int]:
        """Unit (dx, dy) for one step in this direction; north is +y."""
        return _FORWARD[self]


_FORWARD: dict[Compass, tuple[int, int]] = {
    Compass.N: (0, 1),
    Compass.E: (1, 0),
    Compass.S: (0, -1),
    Compass.W: (-1, 0),
}
