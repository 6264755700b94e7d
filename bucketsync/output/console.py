# bucketsync Console Output
# Rich-based tables for state inspection and configuration

from rich.console import Console as RichConsole
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from bucketsync.config.schema import BucketsyncConfig, CopyJob, DownloadJob, TransferJob, UploadJob
from bucketsync.sync.state import Confirmed, Fingerprint, Invalidated, Marker, TransferState


class Console:
    """
    Console output manager using Rich.

    Provides formatted output for state and configuration commands.
    """

    def __init__(self, *, verbose: bool = False, colored: bool = True, console: RichConsole | None = None):
        """
        Initialize console.

        Args:
            verbose: Enable verbose output.
            colored: Enable colored output.
            console: Rich console to write to (created if not given).
        """
        self.verbose = verbose
        self._console = console or RichConsole(no_color=not colored)

    @property
    def rich(self) -> RichConsole:
        return self._console

    def print(self, *args, **kwargs) -> None:
        """Print to console."""
        self._console.print(*args, **kwargs)

    def print_state(self, state: TransferState, *, prefix: str = "") -> None:
        """
        Print recorded transfer entries.

        Args:
            state: Transfer state to display.
            prefix: Only show entries under this key.
        """
        keys = state.keys(prefix)
        if not keys:
            self._console.print("[dim]No recorded transfers[/dim]")
            return

        table = Table(show_header=True, header_style="bold")
        table.add_column("Transfer key", style="cyan")
        table.add_column("Marker")

        for key in keys:
            marker = state.get(key)
            if marker is not None:
                table.add_row(escape(key), self._format_marker(marker))

        self._console.print(table)
        self._console.print(f"[dim]{len(keys)} entries[/dim]")

    def _format_marker(self, marker: Marker) -> str:
        if isinstance(marker, Confirmed):
            return "[green]confirmed[/green]"
        if isinstance(marker, Fingerprint):
            digest = marker.digest if self.verbose else f"{marker.digest[:12]}…"
            return f"[blue]{digest}[/blue]"
        if isinstance(marker, Invalidated):
            return "[yellow]invalidated[/yellow]"
        return "?"

    def print_jobs(self, jobs: list[TransferJob]) -> None:
        """Print configured jobs."""
        if not jobs:
            self._console.print("[dim]No jobs configured[/dim]")
            return

        table = Table(show_header=True, header_style="bold")
        table.add_column("#", justify="right", style="dim")
        table.add_column("Kind", style="magenta")
        table.add_column("Name")
        table.add_column("Details", style="dim")

        for index, job in enumerate(jobs, start=1):
            table.add_row(str(index), job.kind, escape(job.name or ""), escape(self._job_details(job)))

        self._console.print(table)

    def _job_details(self, job: TransferJob) -> str:
        if isinstance(job, CopyJob):
            source = job.source_bucket or "<source>"
            target = job.target_bucket or "<target>"
            details = f"{source}/{job.prefix} → {target}"
        elif isinstance(job, UploadJob):
            details = f"{job.local_dir} → {job.bucket or '<source>'}/{job.prefix}"
        elif isinstance(job, DownloadJob):
            details = f"{job.bucket or '<source>'}/{job.prefix} → {job.local_dir}"
        else:
            return ""
        if getattr(job, "invalidate", False):
            details += " (invalidate)"
        return details

    def print_config_summary(self, config_path: str, config: BucketsyncConfig) -> None:
        """Print configuration summary. Secrets are never shown."""
        credentials = "configured" if config.storage.has_credentials else "default chain"
        self._console.print(
            Panel(
                f"Config: {escape(config_path)}\n"
                f"Region: {config.storage.region or '-'}\n"
                f"Endpoint: {escape(config.storage.endpoint_url or 'default')}\n"
                f"Credentials: {credentials}\n"
                f"Source bucket: {escape(config.source_bucket or '-')}\n"
                f"Target bucket: {escape(config.target_bucket or '-')}\n"
                f"State file: {escape(config.state_file)}\n"
                f"Listing: {'first page only' if config.single_page else 'all pages'}\n"
                f"Jobs: {len(config.jobs)}",
                title="bucketsync Configuration",
                border_style="blue",
            )
        )


def create_console(*, verbose: bool = False, colored: bool = True) -> Console:
    """Create a console instance."""
    return Console(verbose=verbose, colored=colored)
