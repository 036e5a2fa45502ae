from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from martian_robots.commands import Command
from martian_robots.compass import Compass
from martian_robots.errors import IllegalCommand, IllegalStartingPosition
from martian_robots.event_sink import EventSink
from martian_robots.events import EventType
from martian_robots.grid import Grid
from martian_robots.models import Coordinate, Robot
from martian_robots.reporting import format_robot
from martian_robots.stream_io import Instructions, parse_instructions


@dataclass(frozen=True)
class RobotOutcome:
    index: int
    start: Coordinate
    start_facing: Compass
    robot: Robot
    commands_executed: int
    commands_skipped: int

    @property
    def result(self) -> str:
        return format_robot(self.robot)


def place_robot(grid: Grid, position: Coordinate, facing: Compass) -> Robot:
    if not grid.is_in_bounds(position):
        raise IllegalStartingPosition(
            f"illegal starting position {position.x} {position.y}: grid is "
            f"0 0 .. {grid.upper_right.x} {grid.upper_right.y}"
        )
    return Robot(position=position, facing=facing)


def _emit_step(event_sink: EventSink | None, event_type: EventType, robot: Robot, command: Command) -> None:
    if event_sink is None:
        return
    event_sink.emit(
        event_type,
        command=command.value,
        x=robot.position.x,
        y=robot.position.y,
        facing=robot.facing.value,
    )


def step_robot(
    robot: Robot,
    grid: Grid,
    command: Command | str,
    event_sink: EventSink | None = None,
) -> None:
    """
    Apply one command to an active robot.

    Rules:
    - L / R rotate in place; rotation can never leave the grid.
    - F moves one cell in the facing direction if the target is in bounds.
    - An F that would leave the grid:
        - from a scented position: the move is absorbed, the robot stays put and
          remains active, no new scent is recorded
        - otherwise: the current position is scented and the robot is lost there
    """
    if robot.lost:
        raise RuntimeError("cannot step a lost robot")
    if not isinstance(command, Command):
        command = Command.parse(command)

    if command is Command.LEFT:
        robot.facing = robot.facing.rotate_left()
        _emit_step(event_sink, EventType.ROBOT_TURNED, robot, command)
        return
    if command is Command.RIGHT:
        robot.facing = robot.facing.rotate_right()
        _emit_step(event_sink, EventType.ROBOT_TURNED, robot, command)
        return

    candidate = robot.position.step(*robot.facing.forward())
    if grid.is_in_bounds(candidate):
        robot.position = candidate
        _emit_step(event_sink, EventType.ROBOT_MOVED, robot, command)
        return

    # Fall check is keyed on the last in-bounds position, not the off-grid target.
    if grid.is_scented(robot.position):
        _emit_step(event_sink, EventType.MOVE_ABSORBED, robot, command)
        return

    grid.mark_scented(robot.position)
    robot.lost = True
    _emit_step(event_sink, EventType.ROBOT_LOST, robot, command)


def run_robot(
    robot: Robot,
    grid: Grid,
    commands: Iterable[Command | str],
    event_sink: EventSink | None = None,
) -> int:
    """
    Apply commands in order until they run out or the robot is lost.
    Commands after the fall are skipped, not executed, so they are never
    validated either; an illegal character only fails the run if it is reached.
    Returns the number of commands executed.
    """
    executed = 0
    for column, command in enumerate(commands, start=1):
        if robot.lost:
            break
        try:
            step_robot(robot, grid, command, event_sink=event_sink)
        except IllegalCommand as e:
            raise IllegalCommand(f"{e} at column {column}") from e
        executed += 1
    return executed


def simulate(instructions: Instructions, event_sink: EventSink | None = None) -> list[RobotOutcome]:
    """
    Run every robot, in input order, on one shared grid.

    The world size and every starting position are validated before the first
    robot moves. Command letters are checked as they are executed; an illegal
    one still aborts the whole run and no outcomes are returned.
    """
    grid = Grid(instructions.upper_right)
    robots = [place_robot(grid, spec.position, spec.facing) for spec in instructions.robots]

    if event_sink is not None:
        event_sink.emit(EventType.RUN_START, robots=len(robots))
        event_sink.emit(
            EventType.WORLD_CREATED,
            upper_right_x=grid.upper_right.x,
            upper_right_y=grid.upper_right.y,
        )

    outcomes: list[RobotOutcome] = []
    for index, (spec, robot) in enumerate(zip(instructions.robots, robots)):
        if event_sink is not None:
            event_sink.start_robot()
            event_sink.emit(
                EventType.ROBOT_PLACED,
                x=robot.position.x,
                y=robot.position.y,
                facing=robot.facing.value,
                commands=len(spec.commands),
            )

        try:
            executed = run_robot(robot, grid, spec.commands, event_sink=event_sink)
        except IllegalCommand as e:
            raise IllegalCommand(f"line {spec.command_line}: {e}") from e
        skipped = len(spec.commands) - executed
        outcome = RobotOutcome(
            index=index,
            start=spec.position,
            start_facing=spec.facing,
            robot=robot,
            commands_executed=executed,
            commands_skipped=skipped,
        )
        outcomes.append(outcome)

        if event_sink is not None:
            if skipped:
                event_sink.emit(EventType.COMMANDS_SKIPPED, count=skipped)
            event_sink.emit(EventType.ROBOT_FINISHED, result=outcome.result, lost=robot.lost)
            event_sink.finish_robot()

    if event_sink is not None:
        event_sink.emit(EventType.RUN_END, robots=len(outcomes), scented=len(grid.scented))
    return outcomes


def run_robots(text: str, event_sink: EventSink | None = None) -> list[str]:
    """
    Parse instruction text, run every robot and return one result line per robot.

    Any parse error, out-of-range world, illegal start or illegal command raises
    a SimulationError; no partial results are returned.
    """
    instructions = parse_instructions(text)
    return [o.result for o in simulate(instructions, event_sink=event_sink)]
