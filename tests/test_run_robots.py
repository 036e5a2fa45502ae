from __future__ import annotations

import pytest

from martian_robots.engine import run_robots, simulate
from martian_robots.errors import (
    IllegalCommand,
    IllegalStartingPosition,
    InvalidWorldSize,
    MalformedInput,
    SimulationError,
    UnknownCompassPoint,
)
from martian_robots.models import Coordinate
from martian_robots.stream_io import parse_instructions
from tests._support.scenarios import (
    EAST_EDGE_TWICE,
    NORTH_EDGE_TWICE,
    SAMPLE_INPUT,
    SAMPLE_RESULT,
)


def test_sample_scenario():
    assert run_robots(SAMPLE_INPUT) == SAMPLE_RESULT


def test_second_robot_heeds_scent_on_north_edge():
    assert run_robots(NORTH_EDGE_TWICE) == ["0 4 N LOST", "0 4 N"]


def test_second_robot_heeds_scent_on_east_edge():
    assert run_robots(EAST_EDGE_TWICE) == ["4 0 E LOST", "4 0 E"]


def test_full_rotation_returns_to_original_facing():
    assert run_robots("4 4\n0 0 N\nFFLLLLFF") == ["0 4 N"]


def test_scent_absorbed_robot_keeps_executing_later_commands():
    text = "4 4\n0 0 N\nFFFFF\n0 0 N\nFFFFFRF"
    assert run_robots(text) == ["0 4 N LOST", "1 4 E"]


def test_scents_persist_across_more_than_one_later_robot():
    text = "3 3\n3 3 N\nF\n3 3 N\nF\n3 3 E\nF\n"
    assert run_robots(text) == ["3 3 N LOST", "3 3 N", "3 3 E"]


def test_output_order_and_count_match_input():
    text = "\n".join(
        ["10 10"]
        + [line for i in range(7) for line in (f"{i} {i} N", "RF")]
    )
    assert run_robots(text) == [f"{i + 1} {i} E" for i in range(7)]


def test_crlf_and_blank_lines_are_tolerated():
    text = "5 3\r\n\r\n1 1 E\r\nRFRFRFRF\r\n\r\n\r\n3 2 N\rFRRFLLFFRRFLL\n   \n0 3 W\nLLFFFLFLFL\n"
    assert run_robots(text) == SAMPLE_RESULT


def test_trailing_position_line_without_commands():
    assert run_robots("4 4\n1 1 N\nF\n2 2 W") == ["1 2 N", "2 2 W"]


def test_simulate_reports_executed_and_skipped_counts():
    outcomes = simulate(parse_instructions(SAMPLE_INPUT))

    assert [o.index for o in outcomes] == [0, 1, 2]
    lost = outcomes[1]
    assert lost.robot.lost
    assert lost.start == Coordinate(3, 2)
    # FRRFLLFF is where robot 2 falls; RRFLL is never executed.
    assert (lost.commands_executed, lost.commands_skipped) == (8, 5)
    assert outcomes[0].commands_skipped == 0


@pytest.mark.parametrize(
    "text, error",
    [
        ("foobar", MalformedInput),
        ("100 100\n1 1 E\nRFRFRFRF", InvalidWorldSize),
        ("4 4\n6 6 N\nFFFFF", IllegalStartingPosition),
        ("4 4\n1 1 X\nFFFFF", UnknownCompassPoint),
        ("4 4\n1 1 N\nRFLEF", IllegalCommand),
    ],
)
def test_invalid_input_fails_the_whole_run(text, error):
    with pytest.raises(error):
        run_robots(text)


def test_late_failure_returns_no_partial_results():
    # The first robot is valid; the second starts off-grid.
    text = "4 4\n0 0 N\nFFFFF\n9 9 N\nF"
    with pytest.raises(IllegalStartingPosition):
        run_robots(text)


def test_every_failure_is_a_simulation_error():
    for text in ["", "1\n1 1 N\nF", "4 4\n1 1 N\nQ"]:
        with pytest.raises(SimulationError):
            run_robots(text)


def test_illegal_characters_after_a_fall_are_skipped():
    assert run_robots("4 4\n0 0 N\nFFFFFX") == ["0 4 N LOST"]


def test_skipped_illegal_characters_do_not_stop_later_robots():
    assert run_robots("4 4\n0 4 N\nFQ\n1 1 E\nF") == ["0 4 N LOST", "2 1 E"]


def test_illegal_character_before_the_fall_fails_the_run():
    with pytest.raises(IllegalCommand, match="line 3: illegal command 'X' at column 5"):
        run_robots("4 4\n0 0 N\nFFFFXF")


def test_illegal_character_after_a_scent_absorbed_move_still_fails():
    # The second robot is not lost, so it reaches the "X".
    with pytest.raises(IllegalCommand, match="line 6"):
        run_robots("4 4\n0 0 N\nFFFFF\n\n0 0 N\nFFFFFX")
