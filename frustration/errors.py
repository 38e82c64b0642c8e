# Specific exception types for game setup and play
class FrustrationError(Exception):
    """Base exception for game engine errors."""

    pass


class ConfigurationError(FrustrationError, ValueError):
    """Raised when a game cannot be set up from the given options (non-retryable)."""

    pass
