import os
import json
from typing import List, Any, Optional
from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.markup import escape

# Environment variable to control CLI output mode
# Allowed values: 'plain' (default), 'json', 'rich'
OUTPUT_MODE_ENV = "LIB_CLI_OUTPUT"

_console = Console()

def set_output_mode(mode: str) -> None:
    mode = (mode or "").lower().strip()
    if mode in {"plain", "json", "rich"}:
        os.environ[OUTPUT_MODE_ENV] = mode

def get_output_mode() -> str:
    return os.environ.get(OUTPUT_MODE_ENV, "plain").lower()

def _plain(console: Console, text: str) -> None:
    console.print(text, markup=False, highlight=False, emoji=False, soft_wrap=True)

def _status(book: Any) -> str:
    return "Available" if book.available else "Borrowed"

def print_list_result(books: List[Any], console: Optional[Console] = None, empty_message: str = "No books in library.") -> None:
    """Print a list of books according to the current output mode.
    - plain: '1. [ID] Title by Author (Status)' lines, or the empty message
    - json: JSON array of Book.to_dict()
    - rich: Rich table
    """
    out = console or _console
    mode = get_output_mode()

    if mode == "json":
        _plain(out, json.dumps([b.to_dict() for b in books], ensure_ascii=False))
        return

    if not books:
        _plain(out, empty_message)
        return

    if mode == "rich":
        table = Table(title="📚 Books", show_lines=True, header_style="bold cyan")
        table.add_column("ID", style="magenta", no_wrap=True, justify="right")
        table.add_column("Title", style="white")
        table.add_column("Author", style="white")
        table.add_column("Year", justify="right")
        table.add_column("Category")
        table.add_column("Status")
        for b in books:
            status = "[green]Available[/]" if b.available else "[yellow]Borrowed[/]"
            table.add_row(str(b.book_id), escape(b.title), escape(b.author),
                          str(b.publication_year or "-"), escape(b.category), status)
        out.print(table)
    else:
        for i, b in enumerate(books, 1):
            _plain(out, f"{i}. [{b.book_id}] {b.title} by {b.author} ({_status(b)})")

def print_book_detail(book: Any, console: Optional[Console] = None) -> None:
    out = console or _console
    mode = get_output_mode()

    if mode == "json":
        _plain(out, json.dumps(book.to_dict(), ensure_ascii=False))
    elif mode == "rich":
        out.print(Panel.fit(escape(book.describe().rstrip()), title="🔍 Book", border_style="green"))
    else:
        _plain(out, book.describe().rstrip())

def print_stats_result(library: Any, console: Optional[Console] = None) -> None:
    """Print library statistics according to the current output mode.
    - plain: the library's text report
    - json: JSON object from get_statistics()
    - rich: Panel with the main metrics
    """
    out = console or _console
    mode = get_output_mode()

    if mode == "json":
        _plain(out, json.dumps(library.get_statistics(), ensure_ascii=False))
    elif mode == "rich":
        stats = library.get_statistics()
        content = (
            f"[bold]Name:[/] {escape(stats['name'])}\n"
            f"[bold]Total Books:[/] {stats['total_books']}/{stats['capacity']}\n"
            f"[bold]Available:[/] {stats['available_books']}\n"
            f"[bold]Borrowed:[/] {stats['borrowed_books']}\n"
            f"[bold]Capacity Used:[/] {stats['usage_percentage']:.1f}%"
        )
        for category, count in stats["categories"].items():
            content += f"\n  {escape(category)}: {count}"
        out.print(Panel.fit(content, title="📊 Stats", border_style="blue"))
    else:
        _plain(out, library.statistics_report().rstrip())
