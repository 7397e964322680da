from typing import Optional

from exceptions import InvalidArgumentError

MIN_PUBLICATION_YEAR = 1000
MAX_PUBLICATION_YEAR = 2024
UNKNOWN_YEAR = 0


class TextValidator:
    """Validation for the free-text fields of books and libraries."""

    @staticmethod
    def require_text(text: Optional[str], field: str) -> str:
        """Return `text` trimmed, or raise if it is missing or blank."""
        if text is None or not isinstance(text, str):
            raise InvalidArgumentError(f"{field} cannot be empty.")
        t = text.strip()
        if not t:
            raise InvalidArgumentError(f"{field} cannot be empty.")
        return t

    @staticmethod
    def optional_text(text: Optional[str], default: str = "") -> str:
        if text is None:
            return default
        t = str(text).strip()
        return t or default


class NumberValidator:
    """Validation for IDs, capacities and publication years."""

    @staticmethod
    def _is_int(value) -> bool:
        # bool is an int subclass but never a valid ID or year
        return isinstance(value, int) and not isinstance(value, bool)

    @staticmethod
    def require_positive(value, field: str) -> int:
        if not NumberValidator._is_int(value) or value <= 0:
            raise InvalidArgumentError(f"{field} must be a positive integer.")
        return value

    @staticmethod
    def validate_year(year) -> int:
        """Accept 0 (unknown) or a year inside the supported range."""
        if not NumberValidator._is_int(year):
            raise InvalidArgumentError("Publication year must be an integer.")
        if year == UNKNOWN_YEAR:
            return year
        if year < MIN_PUBLICATION_YEAR or year > MAX_PUBLICATION_YEAR:
            raise InvalidArgumentError(
                f"Publication year must be between {MIN_PUBLICATION_YEAR} and "
                f"{MAX_PUBLICATION_YEAR}, or 0 if unknown."
            )
        return year
