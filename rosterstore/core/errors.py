"""Typed failures raised by the store and converted to results at the api boundary."""

from enum import Enum

from pydantic import ValidationError


class ErrorKind(str, Enum):
    VALIDATION_ERROR = 'validation_error'
    NOT_FOUND = 'not_found'
    DUPLICATE_USER = 'duplicate_user'
    INVALID_CREDENTIALS = 'invalid_credentials'
    MAX_MEMBERS_REACHED = 'max_members_reached'
    MIN_MEMBERS_REQUIRED = 'min_members_required'
    STORAGE_UNAVAILABLE = 'storage_unavailable'


class StoreError(Exception):
    """Base class for every expected, recoverable store failure."""

    kind: ErrorKind

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.field = field


class ValidationFailed(StoreError):
    kind = ErrorKind.VALIDATION_ERROR

    def __init__(self, message: str, field: str | None = None, reason: str | None = None) -> None:
        super().__init__(message, field=field)
        self.reason = reason or message

    @classmethod
    def from_pydantic(cls, exc: ValidationError) -> 'ValidationFailed':
        # Only the first error is reported, matching the first-violation-wins rule.
        first_error = exc.errors()[0]
        location = first_error.get('loc') or ()
        field = str(location[0]) if location else None
        message = first_error.get('msg', 'Invalid value.')
        if message.startswith('Value error, '):
            message = message[len('Value error, '):]
        return cls(message, field=field, reason=first_error.get('type'))


class NotFound(StoreError):
    kind = ErrorKind.NOT_FOUND


class DuplicateUser(StoreError):
    kind = ErrorKind.DUPLICATE_USER


class InvalidCredentials(StoreError):
    kind = ErrorKind.INVALID_CREDENTIALS


class MaxMembersReached(StoreError):
    kind = ErrorKind.MAX_MEMBERS_REACHED


class MinMembersRequired(StoreError):
    kind = ErrorKind.MIN_MEMBERS_REQUIRED


class StorageUnavailable(StoreError):
    kind = ErrorKind.STORAGE_UNAVAILABLE
