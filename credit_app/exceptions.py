"""
Domain failures raised by the service layer.

Views never catch these; ``credit_app.exception_handler`` turns them into
HTTP responses.
"""

from django.db import models


class ErrorKind(models.TextChoices):
    NOT_FOUND = 'not_found', 'Not found'
    INVALID_INPUT = 'invalid_input', 'Invalid input'
    OWNERSHIP_MISMATCH = 'ownership_mismatch', 'Ownership mismatch'


class BusinessException(Exception):
    kind = None

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class NotFoundError(BusinessException):
    """A customer id or credit code does not exist."""
    kind = ErrorKind.NOT_FOUND


class InvalidInputError(BusinessException):
    """A supplied value breaks a domain precondition."""
    kind = ErrorKind.INVALID_INPUT


class OwnershipMismatchError(BusinessException, ValueError):
    """
    A credit code resolved to a credit owned by someone else.

    Its message ("Contact admin") is an internal-consistency alarm rather
    than an ordinary rejection, hence the separate kind.
    """
    kind = ErrorKind.OWNERSHIP_MISMATCH
