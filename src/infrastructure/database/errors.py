"""Translation of driver errors into application exceptions."""

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from core.exceptions import DuplicateEmailError, StorageError
from infrastructure.database.models import EMAIL_UNIQUE_CONSTRAINT


def is_email_unique_violation(exc: IntegrityError) -> bool:
    """Tell a duplicate-email violation apart from other integrity errors.

    PostgreSQL names the constraint ("duplicate key value violates unique
    constraint \"uq_profiles_email\""); SQLite names the column
    ("UNIQUE constraint failed: profiles.email").
    """
    message = str(exc.orig if exc.orig is not None else exc).lower()
    if EMAIL_UNIQUE_CONSTRAINT in message:
        return True
    return ("unique" in message or "duplicate" in message) and "email" in message


@contextmanager
def storage_errors(message: str, email: str | None = None) -> Iterator[None]:
    """Re-raise database failures as DuplicateEmailError or StorageError."""
    try:
        yield
    except IntegrityError as exc:
        if is_email_unique_violation(exc):
            raise DuplicateEmailError(email) from exc
        raise StorageError(message, internal_detail=str(exc.orig or exc)) from exc
    except (SQLAlchemyError, OSError) as exc:
        raise StorageError(message, internal_detail=str(exc)) from exc
