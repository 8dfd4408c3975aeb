from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import DBAPIError, SQLAlchemyError


class BackendError(RuntimeError):
    """A database or storage call failed; carries the backend's own message."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class StorageError(BackendError):
    pass


def backend_message(exc: SQLAlchemyError) -> str:
    if isinstance(exc, DBAPIError) and exc.orig is not None:
        return str(exc.orig)
    return str(exc)


@contextmanager
def raise_backend_errors() -> Iterator[None]:
    try:
        yield
    except SQLAlchemyError as exc:
        raise BackendError(backend_message(exc)) from exc
