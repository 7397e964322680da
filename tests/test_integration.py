import pytest

from book import Book
from exceptions import BookNotFoundError, DuplicateBookError, InvalidStateError
from library import Library


def test_small_library_scenario():
    """Fill a two-book library, then walk one book through borrow, return and removal."""
    lib = Library("Test", 2)
    assert lib.add_new_book("A", "X", "", 0, "C").book_id == 1
    assert lib.add_new_book("B", "Y", "", 0, "C").book_id == 2

    with pytest.raises(InvalidStateError):
        lib.add_new_book("C", "Z", "", 0, "C")

    assert lib.borrow_book(1).available is False

    with pytest.raises(InvalidStateError):
        lib.remove_book(1)

    assert lib.return_book(1).available is True
    assert lib.remove_book(1) is True
    assert lib.total_books == 1

def test_ids_stay_unique_across_mixed_operations():
    lib = Library("Mixed", 10)
    lib.add_new_book("A", "X")
    lib.add_book(Book(4, "Imported", "Y"))
    lib.add_new_book("B", "Z")
    lib.remove_book(1)
    lib.add_new_book("C", "W")

    with pytest.raises(DuplicateBookError):
        lib.add_book(Book(5, "Clash", "V"))

    ids = [b.book_id for b in lib.list_books()]
    assert ids == [4, 5, 6]
    assert len(ids) == len(set(ids))

def test_failed_operations_leave_state_intact():
    lib = Library("Steady", 3)
    lib.add_new_book("A", "X", category="Fiction")
    lib.borrow_book(1)
    before = lib.get_statistics()

    with pytest.raises(InvalidStateError):
        lib.borrow_book(1)
    with pytest.raises(InvalidStateError):
        lib.remove_book(1)
    with pytest.raises(BookNotFoundError):
        lib.return_book(2)
    with pytest.raises(DuplicateBookError):
        lib.add_book(Book(1, "Dup", "Y"))
    with pytest.raises(BookNotFoundError):
        lib.reassign_id(2, 5)

    assert lib.get_statistics() == before
