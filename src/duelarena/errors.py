class ArenaError(Exception):
    """Base error for Duel Arena domain exceptions."""


class ValidationError(ArenaError, ValueError):
    """Raised when input fails validation; never retried, nothing is simulated."""


class InvalidName(ValidationError):
    """Raised when a character name is missing or does not match the naming rules."""


class InvalidJob(ValidationError):
    """Raised when a job is missing or not part of the closed job set."""


class MissingParticipant(ValidationError):
    """Raised when a battle is requested without two participants."""


class InvalidParticipant(ValidationError):
    """Raised when a participant is not a structured record."""


class MissingIdentity(ValidationError):
    """Raised when a participant record carries no identity field."""


class InvalidVitality(ValidationError):
    """Raised when a participant has no positive numeric vitality."""


class DuplicateParticipant(ValidationError):
    """Raised when both participants resolve to the same identity."""


class NotFound(ArenaError, LookupError):
    """Raised when a requested character or battle cannot be found."""


class SimulationError(ArenaError):
    """Raised when a validated battle fails while being simulated."""


class PersistenceError(ArenaError):
    """Raised when the character store cannot be read or written."""


class ConfigError(ArenaError):
    """Raised when configuration values are out of range."""
