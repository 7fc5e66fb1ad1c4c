"""termchess: chess rules engine and alpha-beta opponent."""

__version__ = "0.1.0"
