"""Rich console output for organization runs."""

from typing import Dict, List, Optional, Tuple

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from autoorganize.models.result import FileSortingStatus, OrganizationResult

# Color and symbol per final status
STATUS_STYLES: Dict[FileSortingStatus, Tuple[str, str]] = {
    FileSortingStatus.SUCCESS: ("green", "✓"),
    FileSortingStatus.SKIPPED_EXISTING: ("yellow", "↷"),
    FileSortingStatus.FAILURE: ("red", "❌"),
}


class ConsoleUI:
    """
    Styled terminal output for the CLI.

    Everything goes through one Rich Console so that status lines, rules
    and result tables share its width and color settings. Tests can pass a
    Console recording to a string.
    """

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()

    def print(self, *args, **kwargs) -> None:
        self.console.print(*args, **kwargs)

    def rule(self, title: str = "", **kwargs) -> None:
        self.console.rule(title, **kwargs)

    def print_info(self, message: str) -> None:
        self.console.print(f"[blue]ℹ️  {message}[/blue]")

    def print_warning(self, message: str) -> None:
        self.console.print(f"[yellow]⚠️  {message}[/yellow]")

    def print_error(self, message: str) -> None:
        self.console.print(f"[red]❌ {message}[/red]")

    def print_outcome(self, result: OrganizationResult) -> None:
        """
        Print one line telling what happened to a file.

        The line shows the file name in the status color, followed by the
        status message, or the target path when there is no message.

        Args:
            result: Result of the organization attempt.
        """
        name = escape(result.original_file_name or result.original_path)
        if result.status is None:
            self.console.print(f"[dim]… {name} (pending)[/dim]")
            return

        color, symbol = STATUS_STYLES[result.status]
        detail = escape(result.status_message or result.target_path or "")
        self.console.print(f"[{color}]{symbol} {name}[/{color}] {detail}".rstrip())

    def create_table(self, title: str, columns: Optional[List[str]] = None) -> Table:
        """
        Create a table with a bold header row.

        Long cells (paths) fold onto several lines.

        Args:
            title: Table title.
            columns: Column headers.
        """
        table = Table(title=title, show_header=True, header_style="bold magenta")
        for col in columns or []:
            table.add_column(col, overflow="fold")
        return table

    def print_table(self, table: Table) -> None:
        self.console.print(table)


console = ConsoleUI()
