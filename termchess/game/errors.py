"""Exceptions raised by the rules engine.

Recoverable errors (bad coordinates, illegal moves) are meant to be caught by
the caller and retried with different input. ``InvariantViolation`` signals a
bug in the engine itself and should not be caught.
"""


class ChessError(Exception):
    """Base class for all termchess errors."""


class InvalidCoordinate(ChessError, ValueError):
    """Coordinate outside the 8x8 board or unparseable square name."""


class OutOfBounds(InvalidCoordinate):
    """A Mover walked off the edge of the board."""


class InvalidMove(ChessError):
    """Action is not in the legal action list for its square."""


class InvalidCapture(InvalidMove):
    """Capture is not in the legal action list for its square."""


class UnsupportedAction(ChessError, NotImplementedError):
    """Action variant the engine does not know how to apply (promotion)."""


class InvariantViolation(RuntimeError):
    """Internal consistency check failed (missing king, wrong piece on square)."""
