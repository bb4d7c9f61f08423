"""Custom exceptions for mediator."""


class MediatorError(Exception):
    """Base exception for all mediator errors."""


class ConfigurationError(MediatorError):
    """Raised when configuration is invalid."""
