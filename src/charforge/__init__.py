"""Character rules engine for a tabletop-style role-playing game."""

__version__ = "0.1.0"
