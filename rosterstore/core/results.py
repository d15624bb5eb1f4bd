"""Uniform success/failure results handed to the UI collaborator."""

import logging
from typing import Any, Awaitable, Callable

from pydantic import BaseModel, ValidationError

from rosterstore.core.errors import ErrorKind, StoreError, ValidationFailed

logger = logging.getLogger(__name__)


class OperationResult(BaseModel):
    ok: bool
    value: Any = None
    kind: ErrorKind | None = None
    message: str | None = None
    field: str | None = None

    @classmethod
    def success(cls, value: Any = None) -> 'OperationResult':
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: StoreError) -> 'OperationResult':
        return cls(ok=False, kind=error.kind, message=error.message, field=error.field)


async def run_operation(operation: Callable[[], Any]) -> OperationResult:
    """Run a synchronous store operation and wrap its outcome."""
    try:
        return OperationResult.success(operation())
    except ValidationError as exc:
        return OperationResult.failure(ValidationFailed.from_pydantic(exc))
    except StoreError as exc:
        logger.debug('Operation failed with %s: %s', exc.kind.value, exc.message)
        return OperationResult.failure(exc)


async def run_async_operation(operation: Callable[[], Awaitable[Any]]) -> OperationResult:
    try:
        return OperationResult.success(await operation())
    except ValidationError as exc:
        return OperationResult.failure(ValidationFailed.from_pydantic(exc))
    except StoreError as exc:
        logger.debug('Operation failed with %s: %s', exc.kind.value, exc.message)
        return OperationResult.failure(exc)
