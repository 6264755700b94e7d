"""Click-based CLI for bucketsync - bucket and directory synchronization."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import click
from pydantic import ValidationError
from rich.console import Console

from bucketsync import __version__
from bucketsync.config import (
    BucketsyncConfig,
    ensure_config_exists,
    get_config_path,
    load_config,
    validate_config_file,
)
from bucketsync.logger import TransferLogger
from bucketsync.output import Console as OutputConsole
from bucketsync.storage import create_store, credentials_available
from bucketsync.sync import StateManager, TransferEngine, TransferReport

console = Console()
logger = TransferLogger(console)


class CliContext:
    """Global options shared by all commands."""

    def __init__(
        self,
        config_path: Optional[Path] = None,
        state_file: Optional[Path] = None,
        single_page: bool = False,
        verbose: bool = False,
    ):
        self.config_path = config_path
        self.state_file = state_file
        self.single_page = single_page
        self.verbose = verbose

    def load(self) -> BucketsyncConfig:
        """Load configuration and apply command line overrides; exit 1 on failure."""
        try:
            config = load_config(self.config_path)
        except FileNotFoundError as e:
            logger.error(str(e))
            sys.exit(1)
        except ValidationError as e:
            logger.error(f"Invalid configuration: {e}")
            sys.exit(1)

        if self.state_file is not None:
            config.state_file = str(self.state_file)
        if self.single_page:
            config.single_page = True
        if self.verbose:
            config.output.verbose = True
        if not config.output.colored:
            console.no_color = True
        return config

    def transfer_logger(self, config: BucketsyncConfig) -> TransferLogger:
        return TransferLogger(console, verbose=config.output.verbose)

    def engine(self, config: BucketsyncConfig) -> TransferEngine:
        """Build the transfer engine; exit 1 when no credentials can be resolved."""
        if not credentials_available(config.storage):
            logger.error("No storage credentials found (set S3_ID and S3_SECRET or configure the AWS default chain)")
            sys.exit(1)

        transfer_logger = self.transfer_logger(config)
        state_manager = StateManager(Path(config.state_file), logger=transfer_logger)
        return TransferEngine(config, create_store(config.storage), state_manager, transfer_logger)


pass_context = click.make_pass_decorator(CliContext)


@click.group()
@click.version_option(version=__version__, prog_name="bucketsync")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Configuration file (default: ~/.config/bucketsync/config.yaml or $BUCKETSYNC_CONFIG)",
)
@click.option("--state-file", type=click.Path(dir_okay=False, path_type=Path), help="Override transfer state file")
@click.option("--single-page", is_flag=True, help="Only process the first page of each listing")
@click.option("--verbose", "-v", is_flag=True, help="Show detailed output")
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: Optional[Path],
    state_file: Optional[Path],
    single_page: bool,
    verbose: bool,
) -> None:
    """bucketsync - one-way synchronization between buckets and directories.

    \b
    copy:     source bucket  -> target bucket (missing objects)
    upload:   local dir      -> bucket        (changed files)
    download: bucket prefix  -> local dir     (everything)
    """
    ctx.obj = CliContext(config_path, state_file, single_page, verbose)


def _finish(transfer_logger: TransferLogger, report: TransferReport) -> None:
    # Per-item and listing faults are reported, not turned into exit codes
    transfer_logger.summary(report)


@cli.command()
@click.argument("prefix")
@click.option("--source", "source_bucket", help="Source bucket (default: source_bucket / S3_BUCKET_DEV)")
@click.option("--target", "target_bucket", help="Target bucket (default: target_bucket / S3_BUCKET_PROD)")
@click.option("--invalidate", is_flag=True, help="Forget recorded copies under PREFIX first")
@pass_context
def copy(
    obj: CliContext,
    prefix: str,
    source_bucket: Optional[str],
    target_bucket: Optional[str],
    invalidate: bool,
) -> None:
    """Copy objects under PREFIX that are missing from the target bucket."""
    config = obj.load()
    try:
        source = config.require_source_bucket(source_bucket)
        target = config.require_target_bucket(target_bucket)
    except ValueError as e:
        logger.error(str(e))
        sys.exit(1)

    engine = obj.engine(config)
    engine.logger.info(f"Copy: {source}/{prefix} -> {target}")
    report = engine.copy(prefix, source_bucket=source, target_bucket=target, invalidate=invalidate)
    _finish(engine.logger, report)


@cli.command()
@click.argument("local_dir", type=click.Path(file_okay=False, path_type=Path))
@click.option("--bucket", help="Destination bucket (default: source_bucket / S3_BUCKET_DEV)")
@click.option("--prefix", default="", help="Remote prefix to upload under")
@click.option("--invalidate", is_flag=True, help="Forget recorded fingerprints under the prefix first")
@pass_context
def upload(obj: CliContext, local_dir: Path, bucket: Optional[str], prefix: str, invalidate: bool) -> None:
    """Upload files from LOCAL_DIR whose content changed since the last upload."""
    config = obj.load()
    try:
        destination = config.require_source_bucket(bucket)
    except ValueError as e:
        logger.error(str(e))
        sys.exit(1)

    engine = obj.engine(config)
    engine.logger.info(f"Upload: {local_dir} -> {destination}/{prefix}")
    report = engine.upload(local_dir, bucket=destination, prefix=prefix, invalidate=invalidate)
    _finish(engine.logger, report)


@cli.command()
@click.argument("prefix")
@click.argument("local_dir", type=click.Path(file_okay=False, path_type=Path))
@click.option("--bucket", help="Bucket to download from (default: source_bucket / S3_BUCKET_DEV)")
@pass_context
def download(obj: CliContext, prefix: str, local_dir: Path, bucket: Optional[str]) -> None:
    """Download every object under PREFIX into LOCAL_DIR."""
    config = obj.load()
    try:
        source = config.require_source_bucket(bucket)
    except ValueError as e:
        logger.error(str(e))
        sys.exit(1)

    engine = obj.engine(config)
    engine.logger.info(f"Download: {source}/{prefix} -> {local_dir}")
    report = engine.download(prefix, local_dir, bucket=source)
    _finish(engine.logger, report)


@cli.command()
@pass_context
def run(obj: CliContext) -> None:
    """Run every job listed in the configuration."""
    config = obj.load()
    if not config.jobs:
        logger.warning("No jobs configured")
        return

    engine = obj.engine(config)
    try:
        result = engine.run_all()
    except ValueError as e:
        logger.error(str(e))
        sys.exit(1)

    engine.logger.run_summary(result)


# ============================================================================
# State Commands
# ============================================================================


@cli.group()
def state() -> None:
    """Inspect and maintain the transfer state file."""
    pass


@state.command("show")
@click.option("--prefix", default="", help="Only show entries under this key")
@pass_context
def state_show(obj: CliContext, prefix: str) -> None:
    """Show recorded transfers."""
    config = obj.load()
    manager = StateManager(Path(config.state_file), logger=obj.transfer_logger(config))
    output = OutputConsole(verbose=config.output.verbose, console=console)
    output.print(f"[dim]State file: {config.state_file}[/dim]")
    output.print_state(manager.state, prefix=prefix.strip("/"))


@state.command("invalidate")
@click.argument("key")
@pass_context
def state_invalidate(obj: CliContext, key: str) -> None:
    """Invalidate KEY and everything recorded under it.

    \b
    Copies:  {source}T{target}/{prefix}
    Uploads: {bucket}/{prefix}
    """
    transfer_key = key.strip("/")
    if not transfer_key:
        logger.error("Transfer key must not be empty")
        sys.exit(1)

    config = obj.load()
    manager = StateManager(Path(config.state_file), logger=obj.transfer_logger(config))
    cleared = manager.invalidate(transfer_key)
    if manager.persist():
        logger.success(f"Invalidated {cleared} entries under {key}")


@state.command("clear")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@pass_context
def state_clear(obj: CliContext, yes: bool) -> None:
    """Forget every recorded transfer."""
    config = obj.load()
    if not yes and not click.confirm(f"Clear all entries in {config.state_file}?", default=False):
        logger.warning("Cancelled")
        return

    manager = StateManager(Path(config.state_file), logger=obj.transfer_logger(config))
    manager.reset()
    logger.success(f"Cleared {config.state_file}")


# ============================================================================
# Configuration Commands
# ============================================================================


@cli.group()
def config() -> None:
    """Configuration file commands."""
    pass


@config.command("init")
@click.option("--force", "-f", is_flag=True, help="Overwrite an existing configuration file")
@pass_context
def config_init(obj: CliContext, force: bool) -> None:
    """Create a default configuration file."""
    path, created = ensure_config_exists(obj.config_path, force=force)
    if created:
        logger.success(f"Created configuration: {path}")
    else:
        logger.info(f"Configuration already exists: {path} (use --force to overwrite)")


@config.command("show")
@pass_context
def config_show(obj: CliContext) -> None:
    """Show the effective configuration (without secrets)."""
    cfg = obj.load()
    output = OutputConsole(verbose=cfg.output.verbose, console=console)
    output.print_config_summary(str(obj.config_path or get_config_path()), cfg)
    output.print_jobs(cfg.jobs)


@config.command("check")
@click.argument("file", required=False, type=click.Path(dir_okay=False, path_type=Path))
@pass_context
def config_check(obj: CliContext, file: Optional[Path]) -> None:
    """Validate a configuration file."""
    path = file or obj.config_path or get_config_path()
    valid, errors = validate_config_file(path)
    if valid:
        logger.success(f"Configuration is valid: {path}")
        return

    logger.error(f"Configuration is invalid: {path}")
    for message in errors:
        console.print(f"  • {message}")
    sys.exit(1)


def main() -> None:
    """Entry point."""
    cli()


if __name__ == "__main__":
    main()
