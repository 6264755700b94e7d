"""Rich console output for transfer operations."""

from typing import TYPE_CHECKING, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text

if TYPE_CHECKING:
    from bucketsync.sync.actions import TransferAction, TransferReport
    from bucketsync.sync.engine import RunResult


# Keyed by ActionType value
ACTION_STYLES: dict[str, tuple[str, str]] = {
    "copied": ("green", "→ copied"),
    "exists": ("blue", "= exists"),
    "cached": ("dim", "= cached"),
    "uploaded": ("green", "↑ uploaded"),
    "unchanged": ("dim", "= unchanged"),
    "downloaded": ("cyan", "↓ downloaded"),
    "skipped": ("dim", "○ skipped"),
    "error": ("red", "✗ error"),
}


class TransferLogger:
    """Rich console output for transfer operations."""

    def __init__(self, console: Optional[Console] = None, verbose: bool = False):
        """Initialize logger.

        Args:
            console: Rich Console instance
            verbose: Enable verbose output
        """
        self.console = console or Console()
        self.verbose = verbose

    def info(self, message: str) -> None:
        """Blue info message."""
        self.console.print(f"[blue]ℹ[/blue] {escape(message)}")

    def success(self, message: str) -> None:
        """Green success message."""
        self.console.print(f"[green]✓[/green] {escape(message)}")

    def warning(self, message: str) -> None:
        """Yellow warning message."""
        self.console.print(f"[yellow]⚠[/yellow] {escape(message)}")

    def error(self, message: str) -> None:
        """Red error message."""
        self.console.print(f"[red]✗[/red] {escape(message)}")

    def debug(self, message: str) -> None:
        """Dim message, only shown in verbose mode."""
        if self.verbose:
            self.console.print(f"[dim]{escape(message)}[/dim]")

    def action(self, action: "TransferAction") -> None:
        """Display a per-object outcome.

        Skips (cached, unchanged) are only shown in verbose mode.
        """
        if not self.verbose and not action.is_transfer and not action.is_error:
            return

        color, label = ACTION_STYLES.get(action.action_type.value, ("white", "?"))

        text = Text()
        text.append(f"  [{label:>12}] ", style=color)
        text.append(action.key, style="cyan bold")

        if action.error:
            text.append(f" - {action.error}", style="red")
        elif self.verbose and action.reason:
            text.append(f" - {action.reason}", style="dim")

        self.console.print(text)

    def summary(self, report: "TransferReport") -> None:
        """Display the summary of a single job."""
        if report.aborted:
            status = f"[red]✗ {escape(report.name)} aborted[/red]"
        elif report.success:
            status = f"[green]✓ {escape(report.name)} completed[/green]"
        else:
            status = f"[yellow]⚠ {escape(report.name)} completed with errors[/yellow]"

        summary_text = f"""
{status}

[bold]Summary:[/bold]
  • Transferred: [cyan]{report.transferred}[/cyan]
  • Already present: [blue]{report.already_present}[/blue]
  • Skipped: [dim]{report.skipped}[/dim]
  • Errors: [red]{report.errors}[/red]
"""

        if report.error_message:
            summary_text += f"\n[red]{escape(report.error_message)}[/red]\n"

        border = "green" if report.success else ("red" if report.aborted else "yellow")
        self.console.print(Panel(summary_text.strip(), title="Transfer Result", border_style=border))

    def run_summary(self, result: "RunResult") -> None:
        """Display the summary of a multi-job run."""
        for report in result.reports:
            self.summary(report)

        if len(result.reports) > 1:
            self.console.print(
                f"[bold]Jobs:[/bold] {result.completed_jobs}/{len(result.reports)} completed, "
                f"{result.transferred} transferred, {result.errors} errors"
            )
