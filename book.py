from __future__ import annotations

from exceptions import InvalidStateError
from utils.validators import NumberValidator, TextValidator, UNKNOWN_YEAR

DEFAULT_CATEGORY = "General"


class Book:
    """A single book record in the library catalogue.

    A book starts out available. Its availability only changes through
    `borrow()` and `return_book()`. The ID is fixed at construction; the
    owning library reassigns it through `Library.reassign_id()`. Every other
    field goes through a setter that applies the same validation as the
    constructor.
    """

    def __init__(self, book_id: int, title: str, author: str, isbn: str | None = "",
                 publication_year: int = UNKNOWN_YEAR, category: str | None = DEFAULT_CATEGORY) -> None:
        self._book_id = NumberValidator.require_positive(book_id, "Book ID")
        self.title = title
        self.author = author
        self.isbn = isbn
        self.publication_year = publication_year
        self.category = category
        self._available = True

    # ------------------------- Fields ------------------------- #
    @property
    def book_id(self) -> int:
        return self._book_id

    @property
    def title(self) -> str:
        return self._title

    @title.setter
    def title(self, value: str) -> None:
        self._title = TextValidator.require_text(value, "Title")

    @property
    def author(self) -> str:
        return self._author

    @author.setter
    def author(self, value: str) -> None:
        self._author = TextValidator.require_text(value, "Author")

    @property
    def isbn(self) -> str:
        return self._isbn

    @isbn.setter
    def isbn(self, value: str | None) -> None:
        self._isbn = TextValidator.optional_text(value)

    @property
    def publication_year(self) -> int:
        return self._publication_year

    @publication_year.setter
    def publication_year(self, value: int) -> None:
        self._publication_year = NumberValidator.validate_year(value)

    @property
    def category(self) -> str:
        return self._category

    @category.setter
    def category(self, value: str | None) -> None:
        self._category = TextValidator.optional_text(value, DEFAULT_CATEGORY)

    @property
    def available(self) -> bool:
        return self._available

    # ------------------------- Availability ------------------------- #
    def borrow(self) -> bool:
        """Mark the book as checked out."""
        if not self._available:
            raise InvalidStateError(f"Book '{self.title}' is not available for borrowing.")
        self._available = False
        return True

    def return_book(self) -> bool:
        """Mark a checked-out book as available again."""
        if self._available:
            raise InvalidStateError(f"Book '{self.title}' is already available.")
        self._available = True
        return True

    # ------------------------- Rendering ------------------------- #
    def describe(self) -> str:
        lines = [
            "=== BOOK INFORMATION ===",
            f"ID: {self.book_id}",
            f"Title: {self.title}",
            f"Author: {self.author}",
            f"ISBN: {self.isbn or 'not available'}",
            f"Publication Year: {self.publication_year or 'unknown'}",
            f"Category: {self.category}",
            f"Status: {'Available' if self.available else 'Borrowed'}",
        ]
        return "\n".join(lines) + "\n"

    def to_dict(self) -> dict:
        return {
            "book_id": self.book_id,
            "title": self.title,
            "author": self.author,
            "isbn": self.isbn,
            "publication_year": self.publication_year,
            "category": self.category,
            "available": self.available,
        }

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Book):
            return NotImplemented
        return self.book_id == other.book_id

    def __hash__(self) -> int:
        return hash(self.book_id)

    def __str__(self) -> str:  # pragma: no cover - string formatting trivial
        return (f"Book{{ID={self.book_id}, Title='{self.title}', Author='{self.author}', "
                f"Available={'Yes' if self.available else 'No'}}}")

    def __repr__(self) -> str:
        return f"Book(book_id={self.book_id!r}, title={self.title!r}, author={self.author!r})"
