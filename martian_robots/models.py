from dataclasses import dataclass

from martian_robots.compass import Compass


@dataclass(frozen=True)
class Coordinate:
    x: int
    y: int

    def step(self, dx: int, dy: int) -> "Coordinate":
        # The result may lie off the grid; callers check bounds before storing it.
        return Coordinate(self.x + dx, self.y + dy)


@dataclass
class Robot:
    position: Coordinate
    facing: Compass
    # Monotonic: once a robot falls it never moves or turns again.
    lost: bool = False
