"""
construction_tracker.errors

Typed failures raised by the persistence layer.

Responsibilities:
- Define the store error taxonomy surfaced to repository callers.
- Translate SQLAlchemy/SQLite driver errors into that taxonomy.

A missing row is never an error: lookups return `None`.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError, OperationalError


class StoreError(Exception):
    """Base class for all persistence failures."""


class ConstraintViolationError(StoreError):
    """A write violated a foreign-key, uniqueness or NOT NULL constraint."""


class ConcurrentAccessError(StoreError):
    """The database stayed locked past the configured busy timeout."""


class MigrationError(StoreError):
    """
    The on-disk schema could not be brought to the current version.
    Fatal for the session: the database refuses further use.
    """


def _is_lock_error(exc: OperationalError) -> bool:
    message = str(exc.orig if exc.orig is not None else exc).lower()
    return "database is locked" in message or "database is busy" in message


@contextmanager
def translate_store_errors(operation: str) -> Iterator[None]:
    """
    Re-raise driver errors raised inside the block as `StoreError` subclasses.
    Anything not recognised propagates unchanged.
    """

    try:
        yield
    except IntegrityError as exc:
        raise ConstraintViolationError(f"{operation}: {exc.orig}") from exc
    except OperationalError as exc:
        if _is_lock_error(exc):
            raise ConcurrentAccessError(f"{operation}: database is locked") from exc
        raise


# --- Module Notes -----------------------------------------------------------
# Repositories add no error kinds of their own; everything above propagates
# from the DAO layer to the consumer untouched.
