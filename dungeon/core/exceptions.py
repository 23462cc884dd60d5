"""Custom exception hierarchy for the diagram solver."""


class DungeonError(Exception):
    """Base exception for solver failures."""


class PuzzleFormatError(DungeonError):
    """Raised when a puzzle file is missing or malformed."""


class PlacementError(DungeonError):
    """Raised when a wall is placed or removed on an incompatible tile."""


class ValidationError(DungeonError):
    """Raised when a diagram breaks one of the structural rules."""
