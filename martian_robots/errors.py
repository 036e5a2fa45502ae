from __future__ import annotations


class SimulationError(ValueError):
    """Base class for every failure that aborts a simulation run."""


class InputFormatError(SimulationError):
    """Raised when instruction text (or a file holding it) fails validation."""


class MalformedInput(InputFormatError):
    """Wrong token count, non-integer coordinate, or too few lines."""


class UnknownCompassPoint(InputFormatError):
    """A facing token is not one of N/E/S/W."""


class IllegalCommand(InputFormatError):
    """A command character is not one of L/R/F."""


class InvalidWorldSize(SimulationError):
    """The grid's upper-right coordinate is negative or exceeds the size limit."""


class IllegalStartingPosition(SimulationError):
    """A robot was placed outside the grid."""
