"""Display functions for organization results."""

from collections import Counter
from typing import Dict, List

from rich.markup import escape

from autoorganize.models.result import FileSortingStatus, OrganizationResult
from autoorganize.ui.console import STATUS_STYLES, console


def format_status(result: OrganizationResult) -> str:
    """
    Rich markup for the status of a result.

    Returns:
        Colored status name, "Pending" when the result has no status yet.
    """
    if result.status is None:
        return "[dim]Pending[/dim]"
    color, _ = STATUS_STYLES[result.status]
    return f"[{color}]{result.status.value}[/{color}]"


def get_status_counts(results: List[OrganizationResult]) -> Dict[str, int]:
    """Count results per status value."""
    return dict(Counter(r.status.value if r.status else "Pending" for r in results))


def display_results(results: List[OrganizationResult], show_ids: bool = False) -> None:
    """
    Display organization results as a table.

    Args:
        results: Results to show.
        show_ids: Add the result id column (needed to request corrections).
    """
    if not results:
        console.print_warning("No organization results.")
        return

    columns = ["File", "Status", "Target / Message"]
    if show_ids:
        columns.insert(0, "Id")

    table = console.create_table("Organization results", columns)
    for result in results:
        detail = result.status_message or result.target_path or ""
        if result.duplicate_paths:
            detail = "\n".join([detail] + [f"  {p}" for p in result.duplicate_paths])
        row = [escape(result.original_file_name), format_status(result), escape(detail)]
        if show_ids:
            row.insert(0, result.id or "")
        table.add_row(*row)

    console.print_table(table)


def display_summary(results: List[OrganizationResult]) -> None:
    """
    Display final processing summary.

    Args:
        results: Results of the run.
    """
    counts = get_status_counts(results)

    console.rule("[bold green]Summary[/bold green]")
    console.print(f"[blue]Total processed:[/blue] {len(results)}")
    console.print(f"[green]Organized:[/green] {counts.get(FileSortingStatus.SUCCESS.value, 0)}")

    skipped = counts.get(FileSortingStatus.SKIPPED_EXISTING.value, 0)
    if skipped > 0:
        console.print(f"[yellow]Skipped:[/yellow] {skipped}")

    failed = counts.get(FileSortingStatus.FAILURE.value, 0)
    if failed > 0:
        console.print(f"[red]Failed:[/red] {failed}")
