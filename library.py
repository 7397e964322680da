import copy
import logging
from typing import List, Optional, Dict, Any

from book import Book, DEFAULT_CATEGORY
from exceptions import (
    BookNotFoundError,
    DuplicateBookError,
    InvalidArgumentError,
    InvalidStateError,
)
from utils.validators import NumberValidator, TextValidator, UNKNOWN_YEAR

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 1000


class Library:
    """Owns a bounded, insertion-ordered collection of books.

    The library enforces the collection-level rules: it never holds more than
    `capacity` books and no two books share an ID. The availability state
    machine itself lives on `Book`.

    Multi-book queries return snapshots (copies) of the books, while
    single-book lookups return the book the library owns so its validated
    setters stay usable.
    """

    def __init__(self, name: str, capacity: int = DEFAULT_CAPACITY) -> None:
        self.name = name
        self._capacity = NumberValidator.require_positive(capacity, "Capacity")
        self._books: List[Book] = []
        self._next_id = 1

    # ------------------------- Properties ------------------------- #
    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, value: str) -> None:
        self._name = TextValidator.require_text(value, "Library name")

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def next_id(self) -> int:
        return self._next_id

    @property
    def total_books(self) -> int:
        return len(self._books)

    @property
    def available_count(self) -> int:
        return sum(1 for book in self._books if book.available)

    @property
    def borrowed_count(self) -> int:
        return self.total_books - self.available_count

    def is_full(self) -> bool:
        return len(self._books) >= self._capacity

    def is_empty(self) -> bool:
        return not self._books

    # ------------------------- Core operations ------------------------- #
    def add_new_book(self, title: str, author: str, isbn: Optional[str] = "",
                     publication_year: int = UNKNOWN_YEAR, category: Optional[str] = DEFAULT_CATEGORY) -> Book:
        """Create a book with the next free ID and add it."""
        self._ensure_not_full()
        book = Book(self._next_id, title, author, isbn, publication_year, category)
        self._books.append(book)
        self._next_id += 1
        logger.info(f"Added book {book.book_id}: '{book.title}' by {book.author}")
        return book

    def add_book(self, book: Book) -> bool:
        """Add a copy of a pre-constructed Book. Prevent duplicates by ID.

        The library stores its own copy, so later changes to `book` do not
        reach the catalogue.
        """
        if book is None or not isinstance(book, Book):
            raise InvalidArgumentError("Book cannot be empty.")
        self._ensure_not_full()
        if self.find_book(book.book_id) is not None:
            logger.warning(f"Rejected duplicate book ID {book.book_id}")
            raise DuplicateBookError(book.book_id)

        self._books.append(copy.copy(book))
        # Keep auto-assigned IDs clear of manually inserted ones
        if book.book_id >= self._next_id:
            self._next_id = book.book_id + 1
        logger.info(f"Added book {book.book_id}: '{book.title}' by {book.author}")
        return True

    def reassign_id(self, old_id: int, new_id: int) -> Book:
        """Give the book `old_id` a new, unused ID and return it."""
        book = self._require_book(old_id)
        new_id = NumberValidator.require_positive(new_id, "Book ID")
        if new_id == old_id:
            return book
        if self.find_book(new_id) is not None:
            logger.warning(f"Rejected reassignment of book {old_id}: ID {new_id} is taken")
            raise DuplicateBookError(new_id)

        book._book_id = new_id
        if new_id >= self._next_id:
            self._next_id = new_id + 1
        logger.info(f"Reassigned book {old_id} to ID {new_id}")
        return book

    def find_book(self, book_id: int) -> Optional[Book]:
        for book in self._books:
            if book.book_id == book_id:
                return book
        return None

    def find_books_by_title(self, title: str) -> List[Book]:
        """Case-insensitive substring search over titles."""
        needle = TextValidator.require_text(title, "Search title").lower()
        return self._snapshot(b for b in self._books if needle in b.title.lower())

    def find_books_by_author(self, author: str) -> List[Book]:
        """Case-insensitive substring search over authors."""
        needle = TextValidator.require_text(author, "Search author").lower()
        return self._snapshot(b for b in self._books if needle in b.author.lower())

    def find_books_by_category(self, category: str) -> List[Book]:
        """Case-insensitive exact match on category."""
        needle = TextValidator.require_text(category, "Category").lower()
        return self._snapshot(b for b in self._books if b.category.lower() == needle)

    def list_books(self) -> List[Book]:
        return self._snapshot(self._books)

    def list_available_books(self) -> List[Book]:
        return self._snapshot(b for b in self._books if b.available)

    def list_borrowed_books(self) -> List[Book]:
        return self._snapshot(b for b in self._books if not b.available)

    def borrow_book(self, book_id: int) -> Book:
        book = self._require_book(book_id)
        if not book.available:
            logger.warning(f"Rejected borrow of book {book_id}: already borrowed")
            raise InvalidStateError(f"Book '{book.title}' is currently borrowed.")
        book.borrow()
        logger.info(f"Borrowed book {book_id}")
        return book

    def return_book(self, book_id: int) -> Book:
        book = self._require_book(book_id)
        if book.available:
            logger.warning(f"Rejected return of book {book_id}: not borrowed")
            raise InvalidStateError(f"Book '{book.title}' is already available.")
        book.return_book()
        logger.info(f"Returned book {book_id}")
        return book

    def remove_book(self, book_id: int) -> bool:
        book = self._require_book(book_id)
        if not book.available:
            logger.warning(f"Rejected removal of book {book_id}: currently borrowed")
            raise InvalidStateError("Cannot remove a book that is currently borrowed.")
        self._books = [b for b in self._books if b.book_id != book_id]
        logger.info(f"Removed book {book_id}")
        return True

    def clear_available_books(self) -> int:
        """Remove every available book; borrowed books stay. Returns the number removed."""
        before = len(self._books)
        self._books = [b for b in self._books if not b.available]
        removed = before - len(self._books)
        logger.info(f"Cleared {removed} available books")
        return removed

    # ------------------------- Statistics ------------------------- #
    def usage_percentage(self) -> float:
        return 100.0 * len(self._books) / self._capacity

    def get_statistics(self) -> Dict[str, Any]:
        """Get library statistics."""
        categories: Dict[str, int] = {}
        for book in self._books:
            categories[book.category] = categories.get(book.category, 0) + 1

        available = self.available_count
        return {
            "name": self.name,
            "total_books": self.total_books,
            "capacity": self.capacity,
            "available_books": available,
            "borrowed_books": self.total_books - available,
            "usage_percentage": self.usage_percentage(),
            "categories": categories,
        }

    def statistics_report(self) -> str:
        """Render `get_statistics()` as a plain-text summary.

        Categories are listed in the order they were first added.
        """
        stats = self.get_statistics()
        lines = [
            "=== LIBRARY STATISTICS ===",
            f"Name: {stats['name']}",
            f"Total Books: {stats['total_books']}/{stats['capacity']}",
            f"Available Books: {stats['available_books']}",
            f"Borrowed Books: {stats['borrowed_books']}",
            f"Capacity Used: {stats['usage_percentage']:.1f}%",
        ]
        if stats["categories"]:
            lines.append("")
            lines.append("=== BOOKS PER CATEGORY ===")
            for category, count in stats["categories"].items():
                lines.append(f"{category}: {count} books")
        return "\n".join(lines) + "\n"

    # ------------------------- Utilities ------------------------- #
    def _ensure_not_full(self) -> None:
        if self.is_full():
            logger.warning(f"Rejected add: library '{self.name}' is at capacity ({self.capacity})")
            raise InvalidStateError("Library has reached its maximum capacity.")

    def _require_book(self, book_id: int) -> Book:
        book = self.find_book(book_id)
        if book is None:
            raise BookNotFoundError(book_id)
        return book

    @staticmethod
    def _snapshot(books) -> List[Book]:
        return [copy.copy(book) for book in books]

    def __len__(self) -> int:
        return len(self._books)

    def __str__(self) -> str:  # pragma: no cover - string formatting trivial
        return f"Library{{Name='{self.name}', Books={self.total_books}/{self.capacity}, Available={self.available_count}}}"
