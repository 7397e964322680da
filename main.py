import logging
import sys
from typing import Optional, TextIO, Callable, Dict

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.prompt import Confirm
from rich.markup import escape
from rich.logging import RichHandler
from rich import box
import typer

from config import settings, Settings
from exceptions import InvalidArgumentError, LibraryError
from library import Library
from utils.ui_helpers import set_output_mode, print_list_result, print_stats_result, print_book_detail

logger = logging.getLogger(__name__)

SAMPLE_BOOKS = [
    ("Laskar Pelangi", "Andrea Hirata", "978-979-433-549-9", 2005, "Fiction"),
    ("Bumi Manusia", "Pramoedya Ananta Toer", "978-979-433-550-5", 1980, "Fiction"),
    ("Algoritma dan Pemrograman", "Rinaldi Munir", "978-979-433-551-2", 2019, "Computer Science"),
    ("Matematika Diskrit", "Kenneth Rosen", "978-979-433-552-9", 2018, "Mathematics"),
    ("Clean Code", "Robert Martin", "978-979-433-553-6", 2008, "Computer Science"),
]


def configure_logging(level: str = "WARNING") -> None:
    """Send log records to stderr through Rich, once per process."""
    root = logging.getLogger()
    root.setLevel(level)
    if not any(isinstance(h, RichHandler) for h in root.handlers):
        root.addHandler(RichHandler(console=Console(stderr=True), show_path=False))


def seed_sample_data(library: Library) -> int:
    """Load the fixed sample books. Returns how many were added."""
    added = 0
    for title, author, isbn, year, category in SAMPLE_BOOKS:
        try:
            library.add_new_book(title, author, isbn, year, category)
            added += 1
        except LibraryError as e:
            logger.warning(f"Could not load sample book '{title}': {e}")
    return added


def build_library(cfg: Settings = settings) -> Library:
    library = Library(cfg.library_name, cfg.library_capacity)
    if cfg.seed_sample_data:
        seed_sample_data(library)
    return library


class LibrarySession:
    """One interactive menu session over a library.

    The session owns the console it writes to, the stream it reads answers
    from and the running flag of the menu loop. Passing `stream=None` reads
    from standard input.
    """

    MENU_ITEMS = [
        ("1", "Add a new book", "➕"),
        ("2", "Search books", "🔎"),
        ("3", "Borrow a book", "📤"),
        ("4", "Return a book", "📥"),
        ("5", "List all books", "📚"),
        ("6", "Show library statistics", "📊"),
        ("7", "Remove a book", "🗑️"),
        ("8", "List borrowed books", "📋"),
        ("0", "Exit", "🚪"),
    ]

    def __init__(self, library: Library, console: Optional[Console] = None, stream: Optional[TextIO] = None) -> None:
        self.library = library
        self.console = console or Console()
        self.stream = stream
        self._running = False
        self._actions: Dict[int, Callable[[], None]] = {
            1: self.add_book,
            2: self.search_books,
            3: self.borrow_book,
            4: self.return_book,
            5: self.show_all_books,
            6: self.show_statistics,
            7: self.remove_book,
            8: self.show_borrowed_books,
            0: self.exit,
        }

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> None:
        self._running = True
        self.console.print(Panel.fit(
            f"[bold]Library:[/] {escape(self.library.name)}\n"
            f"[bold]Maximum capacity:[/] {self.library.capacity} books\n"
            f"[bold]Books loaded:[/] {self.library.total_books}",
            title=f"Welcome to {escape(settings.app_name)}",
            border_style="cyan",
        ))

    def stop(self) -> None:
        self._running = False

    def run(self) -> None:
        """Start the session and process menu choices until it is stopped."""
        self.start()
        while self._running:
            try:
                self.render_menu()
                self.handle_choice(self.read("Select an option"))
            except EOFError:
                self.stop()
            except Exception as e:
                logger.exception("Unexpected error in menu loop")
                self._error(f"Unexpected error: {e}")
            self.console.print()

    # ------------------------- Input ------------------------- #
    def read(self, prompt: str) -> str:
        raw = self.console.input(f"{prompt}: ", stream=self.stream)
        if self.stream is not None and raw == "":
            raise EOFError
        return raw.strip()

    def read_int(self, prompt: str, field: str) -> int:
        raw = self.read(prompt)
        try:
            return int(raw)
        except ValueError:
            raise InvalidArgumentError(f"{field} must be a number.") from None

    def confirm(self, prompt: str) -> bool:
        return Confirm.ask(prompt, default=False, console=self.console, stream=self.stream)

    # ------------------------- Menu ------------------------- #
    def render_menu(self) -> None:
        table = Table.grid(padding=(0, 2))
        table.add_column(justify="right", style="bold cyan", width=4)
        table.add_column(justify="left", style="white")
        for key, label, icon in self.MENU_ITEMS:
            table.add_row(f"[reverse]{key}[/]", f"{icon} {label}")

        self.console.print(Panel(
            table,
            title=escape(settings.app_name),
            border_style="cyan",
            box=box.HEAVY,
            padding=(1, 2),
        ))

    def handle_choice(self, choice: str) -> None:
        """Run one menu action, rendering any catalogue error it raises."""
        try:
            try:
                number = int(choice)
            except ValueError:
                raise InvalidArgumentError("Choice must be a number.") from None
            if number not in self._actions:
                raise InvalidArgumentError("Choice must be between 0 and 8.")
            self._actions[number]()
        except LibraryError as e:
            self._error(str(e))

    def _error(self, message: str) -> None:
        self.console.print(f"[bold red]✗ Error:[/] {escape(message)}")

    def _success(self, message: str) -> None:
        self.console.print(f"[green]✓ {escape(message)}[/]")

    # ------------------------- Actions ------------------------- #
    def add_book(self) -> None:
        self.console.print("[bold]=== ADD A NEW BOOK ===[/]")
        title = self.read("Title")
        author = self.read("Author")
        isbn = self.read("ISBN (optional)")
        year_raw = self.read("Publication year (0 if unknown)")
        try:
            year = int(year_raw) if year_raw else 0
        except ValueError:
            raise InvalidArgumentError("Publication year must be a number.") from None
        category = self.read("Category")

        book = self.library.add_new_book(title, author, isbn, year, category)
        self._success(f"Book added with ID {book.book_id}: {book}")

    def search_books(self) -> None:
        self.console.print("[bold]=== SEARCH BOOKS ===[/]")
        self.console.print("1. By ID\n2. By title\n3. By author\n4. By category", markup=False)
        search_type = self.read_int("Search type (1-4)", "Search type")

        if search_type == 1:
            book_id = self.read_int("Book ID", "Book ID")
            book = self.library.find_book(book_id)
            if book is None:
                self._error(f"Book with ID {book_id} not found.")
            else:
                self._success("Book found:")
                print_book_detail(book, console=self.console)
            return

        searches = {
            2: ("Title (full or partial)", "title", self.library.find_books_by_title),
            3: ("Author (full or partial)", "author", self.library.find_books_by_author),
            4: ("Category", "category", self.library.find_books_by_category),
        }
        if search_type not in searches:
            raise InvalidArgumentError("Search type must be between 1 and 4.")

        prompt, label, finder = searches[search_type]
        query = self.read(prompt)
        books = finder(query)
        criteria = f"{label} '{query}'"
        if books:
            self._success(f"Found {len(books)} books for {criteria}:")
        print_list_result(books, console=self.console, empty_message=f"No books found for {criteria}.")

    def borrow_book(self) -> None:
        self.console.print("[bold]=== BORROW A BOOK ===[/]")
        book = self.library.borrow_book(self.read_int("Book ID to borrow", "Book ID"))
        self._success(f"Book borrowed: {book}")

    def return_book(self) -> None:
        self.console.print("[bold]=== RETURN A BOOK ===[/]")
        book = self.library.return_book(self.read_int("Book ID to return", "Book ID"))
        self._success(f"Book returned: {book}")

    def show_all_books(self) -> None:
        self.console.print("[bold]=== ALL BOOKS ===[/]")
        books = self.library.list_books()
        if books:
            self.console.print(f"Total: {len(books)} books")
        print_list_result(books, console=self.console, empty_message="The library is empty.")

    def show_statistics(self) -> None:
        print_stats_result(self.library, console=self.console)

    def remove_book(self) -> None:
        self.console.print("[bold]=== REMOVE A BOOK ===[/]")
        book_id = self.read_int("Book ID to remove", "Book ID")
        book = self.library.find_book(book_id)
        if book is None:
            self._error(f"Book with ID {book_id} not found.")
            return

        self.console.print(Panel(
            f"[bold]Title:[/] {escape(book.title)}\n"
            f"[bold]Author:[/] {escape(book.author)}\n"
            f"[bold]ID:[/] {book.book_id}",
            title="📚 Book to remove",
            border_style="yellow",
        ))
        if self.confirm("Are you sure?"):
            self.library.remove_book(book_id)
            self._success(f"'{book.title}' removed.")
        else:
            self.console.print("[blue]Removal cancelled.[/]")

    def show_borrowed_books(self) -> None:
        self.console.print("[bold]=== BORROWED BOOKS ===[/]")
        books = self.library.list_borrowed_books()
        if books:
            self.console.print(f"Total: {len(books)} books currently borrowed")
        print_list_result(books, console=self.console, empty_message="No books are currently borrowed.")

    def exit(self) -> None:
        self.console.print("[bold]Thank you for using the library catalogue![/]")
        self.console.print("Final statistics:")
        print_stats_result(self.library, console=self.console)
        self.stop()


def run_menu(cfg: Settings = settings) -> None:
    """Interactive menu for the library catalogue."""
    session = LibrarySession(build_library(cfg))
    session.run()


# --- Typer CLI App ---
app = typer.Typer(help="Library catalogue CLI")

@app.callback()
def _global_options(
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output format: plain | json | rich (default: plain)",
    )
):
    """Global CLI options (output mode)."""
    configure_logging(settings.log_level)
    if output:
        set_output_mode(output)

@app.command("list")
def cli_list():
    """List every book in the sample catalogue."""
    library = build_library()
    print_list_result(library.list_books())

@app.command("borrowed")
def cli_borrowed():
    """List borrowed books."""
    library = build_library()
    print_list_result(library.list_borrowed_books(), empty_message="No books are currently borrowed.")

@app.command("find")
def cli_find(book_id: int = typer.Argument(..., help="Book ID")):
    """Find a book by ID and show its details."""
    library = build_library()
    book = library.find_book(book_id)
    if book:
        print_book_detail(book)
    else:
        print(f"Book with ID {book_id} not found.")

@app.command("search")
def cli_search(
    query: str = typer.Argument(..., help="Search query"),
    by: str = typer.Option("title", "--by", "-b", help="Field to search: title | author | category"),
):
    """Search books by title, author (substring) or category (exact)."""
    library = build_library()
    finders = {
        "title": library.find_books_by_title,
        "author": library.find_books_by_author,
        "category": library.find_books_by_category,
    }
    finder = finders.get(by.lower())
    if finder is None:
        print(f"Unsupported search field: {by}. Use title, author or category.")
        return
    try:
        books = finder(query)
    except LibraryError as e:
        print(f"Error: {e}")
        return
    print_list_result(books, empty_message="No books match the criteria.")

@app.command("stats")
def cli_stats():
    """Show library statistics."""
    print_stats_result(build_library())

@app.command("menu")
def cli_menu():
    """Start the interactive menu."""
    run_menu()


def main() -> None:
    if len(sys.argv) > 1:
        app()
    else:
        configure_logging(settings.log_level)
        run_menu()


if __name__ == "__main__":
    main()
