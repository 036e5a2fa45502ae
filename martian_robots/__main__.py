from __future__ import annotations

import argparse
import sys
from pathlib import Path

from martian_robots.engine import simulate
from martian_robots.errors import InputFormatError, SimulationError
from martian_robots.event_sink import InMemoryEventSink
from martian_robots.reporting import render_results, render_trace
from martian_robots.stream_io import (
    load_event_stream,
    load_instructions,
    parse_instructions,
    write_event_stream,
)


def _cmd_run(args: argparse.Namespace) -> int:
    try:
        text = load_instructions(Path(str(args.input)))
    except InputFormatError as e:
        print(f"ERROR: cannot read instructions: {e}", file=sys.stderr)
        return 2

    sink = InMemoryEventSink()
    try:
        outcomes = simulate(parse_instructions(text), event_sink=sink)
    except SimulationError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2

    if args.events_out:
        try:
            write_event_stream(sink.events, Path(str(args.events_out)))
        except OSError as e:
            print(f"ERROR: cannot write events: {e}", file=sys.stderr)
            return 2

    if args.trace:
        sys.stderr.write(render_trace(sink.events))

    sys.stdout.write(render_results(o.result for o in outcomes))
    return 0


def _cmd_trace(args: argparse.Namespace) -> int:
    try:
        events = load_event_stream(Path(str(args.events)))
    except InputFormatError as e:
        print(f"ERROR: invalid event stream: {e}", file=sys.stderr)
        return 2
    sys.stdout.write(render_trace(events))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser: argparse.ArgumentParser = argparse.ArgumentParser(
        prog="martian_robots",
        description=(
            "Martian Robots Simulator.\n"
            "\n"
            "Moves robots over a bounded grid and prints each robot's final\n"
            "position and facing, or LOST if it fell off the edge."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    sub = parser.add_subparsers(dest="command", required=True)

    run = sub.add_parser("run", help="Simulate an instruction file and print one result line per robot.")
    run.add_argument(
        "-i",
        "--input",
        type=str,
        required=True,
        help="Path of the file containing robot instructions ('-' reads stdin).",
    )
    run.add_argument("--events-out", type=str, default=None, help="Optional: write the event stream as JSON.")
    run.add_argument("--trace", action="store_true", help="Print a per-robot step trace to stderr.")
    run.set_defaults(func=_cmd_run)

    trace = sub.add_parser("trace", help="Render a step trace from an event stream JSON.")
    trace.add_argument("--events", type=str, required=True, help="Event stream JSON written by run --events-out.")
    trace.set_defaults(func=_cmd_trace)

    return parser


def main(argv: list[str] | None = None) -> int:
    argv = argv if argv is not None else sys.argv[1:]
    parser = build_parser()
    args = parser.parse_args(argv)
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
