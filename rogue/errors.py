class RogueError(Exception):
    """Base exception for the rogue package."""


class ConfigurationError(RogueError):
    """Raised when dungeon generation bounds are missing or invalid."""


class DungeonUnsatisfiableError(RogueError):
    """Raised when the generator runs out of attempts before reaching its room count."""


class SpawnError(RogueError):
    """Raised when there are not enough free floor cells to place entities."""


class MovementError(RogueError):
    """Raised when an entity is asked to move but has no move handler."""
