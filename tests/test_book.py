import pytest

from book import Book
from exceptions import ErrorKind, InvalidArgumentError, InvalidStateError


def test_new_book_is_available_and_trimmed():
    book = Book(1, "  Ulysses ", " James Joyce  ", " 9780199535675 ", 1922, "  Fiction ")
    assert book.available is True
    assert book.title == "Ulysses"
    assert book.author == "James Joyce"
    assert book.isbn == "9780199535675"
    assert book.category == "Fiction"
    assert book.publication_year == 1922

def test_short_constructor_defaults():
    book = Book(7, "Sapiens", "Yuval Noah Harari")
    assert book.isbn == ""
    assert book.publication_year == 0
    assert book.category == "General"
    assert book.available is True

def test_empty_category_falls_back_to_general():
    assert Book(1, "T", "A", category="   ").category == "General"
    assert Book(1, "T", "A", category=None).category == "General"

@pytest.mark.parametrize("book_id", [0, -3, "1", True])
def test_invalid_id_rejected(book_id):
    with pytest.raises(InvalidArgumentError):
        Book(book_id, "Title", "Author")

@pytest.mark.parametrize("title,author", [("", "Author"), ("   ", "Author"), ("Title", ""), ("Title", None)])
def test_blank_title_or_author_rejected(title, author):
    with pytest.raises(InvalidArgumentError):
        Book(1, title, author)

@pytest.mark.parametrize("year", [999, 2025, -1])
def test_year_out_of_range_rejected(year):
    with pytest.raises(InvalidArgumentError):
        Book(1, "Title", "Author", "", year, "C")

@pytest.mark.parametrize("year", [0, 1000, 2024])
def test_year_bounds_and_unknown_accepted(year):
    assert Book(1, "Title", "Author", "", year, "C").publication_year == year

def test_borrow_return_toggle():
    book = Book(1, "Title", "Author")
    assert book.borrow() is True
    assert book.available is False

    with pytest.raises(InvalidStateError) as exc:
        book.borrow()
    assert exc.value.kind is ErrorKind.INVALID_STATE

    assert book.return_book() is True
    assert book.available is True

def test_return_without_borrow_fails():
    book = Book(1, "Title", "Author")
    with pytest.raises(InvalidStateError):
        book.return_book()
    assert book.available is True

def test_setters_validate():
    book = Book(1, "Title", "Author")
    book.title = "  New Title "
    assert book.title == "New Title"
    with pytest.raises(InvalidArgumentError):
        book.title = "  "
    with pytest.raises(InvalidArgumentError):
        book.author = ""
    with pytest.raises(InvalidArgumentError):
        book.publication_year = 3000
    # Failed assignments leave the previous values in place
    assert book.title == "New Title"
    assert book.author == "Author"
    assert book.book_id == 1

def test_available_is_read_only():
    book = Book(1, "Title", "Author")
    with pytest.raises(AttributeError):
        book.available = False

def test_book_id_is_read_only():
    book = Book(1, "Title", "Author")
    with pytest.raises(AttributeError):
        book.book_id = 2
    assert book.book_id == 1

def test_equality_by_id_only():
    a = Book(1, "Title", "Author")
    b = Book(1, "Other", "Someone", "123", 2000, "X")
    c = Book(2, "Title", "Author")
    assert a == b
    assert a != c
    assert hash(a) == hash(b)
    assert len({a, b, c}) == 2

def test_describe_placeholders():
    text = Book(3, "Clean Code", "Robert Martin").describe()
    assert "ID: 3" in text
    assert "ISBN: not available" in text
    assert "Publication Year: unknown" in text
    assert "Category: General" in text
    assert "Status: Available" in text

def test_describe_full_and_borrowed():
    book = Book(4, "Clean Code", "Robert Martin", "978-979-433-553-6", 2008, "Computer Science")
    book.borrow()
    text = book.describe()
    assert text.startswith("=== BOOK INFORMATION ===\n")
    assert "ISBN: 978-979-433-553-6" in text
    assert "Publication Year: 2008" in text
    assert "Status: Borrowed" in text
    assert text == book.describe()

def test_to_dict():
    book = Book(5, "T", "A", "I", 2000, "C")
    assert book.to_dict() == {
        "book_id": 5,
        "title": "T",
        "author": "A",
        "isbn": "I",
        "publication_year": 2000,
        "category": "C",
        "available": True,
    }
