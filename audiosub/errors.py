"""Custom exceptions for AudioSub."""


class AudioSubError(Exception):
    """Base class for exceptions in this package."""
    pass


class ValidationError(AudioSubError):
    """Raised when an input file is too large or of the wrong type."""
    pass


class ConfigurationError(AudioSubError):
    """Raised when the API key or the config file is missing or invalid."""
    pass


class ServiceError(AudioSubError):
    """Raised when the model call fails or returns no content."""
    pass


class ParseError(AudioSubError):
    """Raised when the model output is not the expected JSON array."""
    pass
