# tests/_support/scenarios.py
from __future__ import annotations

from martian_robots.compass import Compass
from martian_robots.grid import Grid
from martian_robots.models import Coordinate, Robot

SAMPLE_INPUT = """5 3
1 1 E
RFRFRFRF

3 2 N
FRRFLLFFRRFLL

0 3 W
LLFFFLFLFL"""

SAMPLE_RESULT = ["1 1 E", "3 3 N LOST", "2 3 S"]

NORTH_EDGE_TWICE = """4 4
0 0 N
FFFFF

0 0 N
FFFFF"""

EAST_EDGE_TWICE = """4 4
0 0 E
FFFFF

0 0 E
FFFFF"""


def make_robot(x: int, y: int, facing: str) -> Robot:
    return Robot(position=Coordinate(x, y), facing=Compass(facing))


def make_grid(ux: int, uy: int, scented: list[tuple[int, int]] | None = None) -> Grid:
    """
    Grid with an optional pre-seeded scent set, so the absorption rule can be
    tested without running an earlier robot off the edge first.
    """
    grid = Grid.create(ux, uy)
    for x, y in scented or []:
        grid.mark_scented(Coordinate(x, y))
    return grid
