"""
Martian Robots Simulator

Core modules:
- compass / commands: closed vocabularies for facing and instructions
- grid: world boundary and scent marks left by lost robots
- engine: movement rules and run orchestration
- stream_io: instruction text parsing and event stream (de)serialization
- reporting: result lines and human-readable traces (no behavior changes)
"""
