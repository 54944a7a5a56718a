"""Exceptions shared across the package."""


class ConfigurationError(Exception):
    """Raised when report configuration validation fails."""
    pass
