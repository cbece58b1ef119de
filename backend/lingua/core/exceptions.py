"""
Custom exceptions for the application.
"""


class LinguaException(Exception):
    """Base exception for all Lingua application exceptions."""
    pass


class ValidationError(LinguaException):
    """Raised when validation fails."""
    pass


class NotFoundError(LinguaException):
    """Raised when a requested resource is not found."""
    pass


class CardStoreError(LinguaException):
    """Raised when the card store cannot persist a card."""
    pass
