"""CLI interface for davsync."""

import logging
from typing import Optional

import click

from .cli_progress import SyncProgressDisplay
from .config import SyncConfig
from .exceptions import DavSyncConfigError, DavSyncError
from .sync import sync
from .utils import format_size

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool) -> None:
    """Configure logging based on the verbose flag."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%H:%M:%S",
        )
        logging.getLogger("davsync").setLevel(logging.DEBUG)
        # Keep per-request transport chatter out of the debug output
        logging.getLogger("httpcore").setLevel(logging.INFO)
    else:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
        logging.getLogger("httpx").setLevel(logging.WARNING)


@click.command()
@click.option(
    "--config",
    "-c",
    "config_path",
    required=True,
    type=click.Path(dir_okay=False),
    help="Path to config YAML file",
)
@click.option(
    "--progress/--no-progress",
    default=None,
    help="Show a progress bar (overrides show_progress)",
)
@click.option(
    "--pseudo-hash/--full-hash",
    default=None,
    help="Fingerprint name, size and first 1 KB instead of full content "
    "(overrides use_pseudo_hash)",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose/debug logging output",
)
@click.version_option(package_name="davsync")
@click.pass_context
def main(
    ctx: click.Context,
    config_path: str,
    progress: Optional[bool],
    pseudo_hash: Optional[bool],
    verbose: bool,
) -> None:
    """Sync folders to a WebDAV endpoint.

    Only files whose content changed since the last successful sync are
    uploaded. The hash store is kept both locally and on the server.
    """
    configure_logging(verbose)

    try:
        config = SyncConfig.load(config_path)
    except DavSyncConfigError as e:
        logger.error(f"Invalid configuration: {e}")
        ctx.exit(1)
    logger.info(f"Loaded config from {config_path}")

    if progress is not None:
        config.show_progress = progress
    if pseudo_hash is not None:
        config.use_pseudo_hash = pseudo_hash

    try:
        if config.show_progress:
            with SyncProgressDisplay() as display:
                stats = sync(config, progress_callback=display.callback)
        else:
            stats = sync(config)
    except (DavSyncError, OSError) as e:
        logger.error(f"Sync failed: {e}")
        ctx.exit(1)

    logger.info("Sync completed successfully")
    click.echo(
        f"Uploaded {stats['uploads']} file(s) "
        f"({format_size(stats['bytes_uploaded'])}), "
        f"skipped {stats['skips']} unchanged file(s)"
    )


if __name__ == "__main__":
    main()
