"""Exceptions raised by the Atlas game.

Validation errors are recoverable: the caller shows the message and asks the
same player again. Everything else signals a problem with configuration or
persisted state.
"""


class AtlasError(Exception):
    """Base class for all Atlas exceptions."""
    pass


# ============ Submission validation ============

class ValidationError(AtlasError):
    """A submitted place name was rejected."""
    message = "Invalid place name"

    def __init__(self, message=None):
        super().__init__(message or self.message)


class EmptyInput(ValidationError):
    """Input was blank after trimming."""
    message = "Please enter a place name"


class DuplicateEntry(ValidationError):
    """The place was already used this game (case-insensitive)."""
    message = "This place has already been used!"

    def __init__(self, name):
        self.name = name
        super().__init__()


class ChainMismatch(ValidationError):
    """The place does not start with the required chain letter."""

    def __init__(self, expected):
        self.expected = expected
        super().__init__(f"Place name must start with '{expected}'")


class GameFinished(ValidationError):
    """The game was finished; reset to play again."""
    message = "The game is over. Reset to start a new one."


# ============ State and configuration ============

class CorruptState(AtlasError):
    """A persisted snapshot could not be decoded."""
    pass


class ConfigError(AtlasError):
    """Configuration file is missing or invalid."""
    pass
