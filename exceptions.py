from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    """Semantic category shared by every catalogue error."""
    INVALID_ARGUMENT = "invalid_argument"
    INVALID_STATE = "invalid_state"
    NOT_FOUND = "not_found"
    DUPLICATE_ID = "duplicate_id"


class LibraryError(Exception):
    """Base class for errors raised by Book and Library.

    Only the subclasses carry a `kind`; code raises one of them, never the base.
    """

    kind: Optional[ErrorKind] = None


class InvalidArgumentError(LibraryError, ValueError):
    kind = ErrorKind.INVALID_ARGUMENT


class InvalidStateError(LibraryError, RuntimeError):
    kind = ErrorKind.INVALID_STATE


class BookNotFoundError(LibraryError, LookupError):
    """Raised when no book with the requested ID exists in the library."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, book_id: int, message: Optional[str] = None) -> None:
        self.book_id = book_id
        super().__init__(message or f"Book with ID {book_id} not found.")


class DuplicateBookError(LibraryError, ValueError):
    """Raised when a book with the same ID is already in the library."""

    kind = ErrorKind.DUPLICATE_ID

    def __init__(self, book_id: int, message: Optional[str] = None) -> None:
        self.book_id = book_id
        super().__init__(message or f"Book with ID {book_id} already exists.")
