from __future__ import annotations

from dataclasses import dataclass, field

from martian_robots.errors import InvalidWorldSize
from martian_robots.models import Coordinate

# Safety limit on map size, applied to each upper-right coordinate (inclusive).
MAX_COORDINATE = 50


@dataclass
class Grid:
    """
    The world: lower-left corner is always (0, 0), upper_right is inclusive.

    `scented` holds positions from which a robot has fallen. It only grows
    and is shared by every robot in one run, so a later robot that tries the
    same off-grid move from a scented position stops instead of falling.
    """

    upper_right: Coordinate
    scented: set[Coordinate] = field(default_factory=set)

    def __post_init__(self) -> None:
        ux, uy = self.upper_right.x, self.upper_right.y
        if not (0 <= ux <= MAX_COORDINATE and 0 <= uy <= MAX_COORDINATE):
            raise InvalidWorldSize(
                f"illegal world size {ux} {uy}: each coordinate must be in [0..{MAX_COORDINATE}]"
            )

    @classmethod
    def create(cls, upper_right_x: int, upper_right_y: int) -> Grid:
        return cls(Coordinate(upper_right_x, upper_right_y))

    def is_in_bounds(self, pos: Coordinate) -> bool:
        return 0 <= pos.x <= self.upper_right.x and 0 <= pos.y <= self.upper_right.y

    def is_scented(self, pos: Coordinate) -> bool:
        return pos in self.scented

    def mark_scented(self, pos: Coordinate) -> None:
        self.scented.add(pos)
