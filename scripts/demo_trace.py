from __future__ import annotations

from pathlib import Path

from martian_robots.engine import run_robots
from martian_robots.event_sink import InMemoryEventSink
from martian_robots.reporting import render_trace

SAMPLE = Path(__file__).resolve().parents[1] / "samples" / "sample_instructions.txt"


def main() -> None:
    sink = InMemoryEventSink()
    results = run_robots(SAMPLE.read_text(encoding="utf-8"), event_sink=sink)

    print(render_trace(sink.events))
    print("Results:")
    for line in results:
        print(f"  {line}")


if __name__ == "__main__":
    main()
