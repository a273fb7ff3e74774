"""CLI interface for keepwarm"""

import logging
import sys
import time
from pathlib import Path
from typing import Optional

import click

from keepwarm.application.ping_service import PingService
from keepwarm.application.scheduled_task import run_scheduled_task
from keepwarm.infrastructure.config.config_manager import ConfigManager, ConfigurationError

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    """Setup logging configuration"""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )
    logging.getLogger().setLevel(level)
    # urllib3 logs every connection at DEBUG
    logging.getLogger("urllib3").setLevel(logging.DEBUG if verbose else logging.WARNING)


def _die(message: str, verbose: bool = False, exc: Optional[Exception] = None) -> None:
    """Exit with a user-friendly error message"""
    if exc is not None:
        logger.error(message, exc_info=verbose)
    else:
        logger.error(message)
    raise click.ClickException(message)


def _load_config(ctx: click.Context) -> ConfigManager:
    """Load configuration, failing closed on malformed values"""
    try:
        return ConfigManager(config_path=ctx.obj.get("config_path"))
    except ConfigurationError as e:
        _die(str(e), verbose=ctx.obj.get("verbose", False), exc=e)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.option(
    "--config",
    type=click.Path(exists=True, path_type=Path),
    help="Path to .keepwarm.yml config file",
)
@click.pass_context
def cli(ctx, verbose: bool, config: Path):
    """keepwarm - keep HTTP endpoints warm with retrying pings"""
    ctx.ensure_object(dict)
    setup_logging(verbose)
    ctx.obj["config_path"] = config
    ctx.obj["verbose"] = verbose


@cli.command()
@click.pass_context
def run(ctx):
    """Ping every configured target once.

    Targets come from API_LIST (a JSON array of URLs) or the config file.
    """
    verbose = ctx.obj.get("verbose", False)
    config_manager = _load_config(ctx)

    try:
        run_scheduled_task(config_manager.config)
    except Exception as e:
        _die(f"Fatal error: {e}", verbose=verbose, exc=e)


@cli.command()
@click.option(
    "--interval",
    type=click.IntRange(min=1),
    help="Seconds between batches. Overrides SCHEDULE_INTERVAL and config.",
)
@click.option(
    "--max-runs",
    type=click.IntRange(min=1),
    help="Stop after this many batches (default: run forever)",
)
@click.pass_context
def schedule(ctx, interval: Optional[int], max_runs: Optional[int]):
    """Ping every configured target on a fixed interval."""
    verbose = ctx.obj.get("verbose", False)
    config_manager = _load_config(ctx)
    config = config_manager.config
    interval = interval or config.schedule.interval_seconds

    logger.info(
        f"Starting scheduler: {len(config.targets.urls)} target(s), interval={interval}s"
    )

    runs = 0
    try:
        while True:
            run_scheduled_task(config)
            runs += 1
            if max_runs is not None and runs >= max_runs:
                break
            logger.debug(f"Next batch in {interval}s")
            time.sleep(interval)
    except KeyboardInterrupt:
        logger.info("Scheduler interrupted")
    except Exception as e:
        _die(f"Fatal error: {e}", verbose=verbose, exc=e)

    logger.info(f"Scheduler stopped after {runs} batch(es)")


@cli.command()
@click.argument("url", type=str)
@click.option("--max-attempts", type=click.IntRange(min=1), help="Attempts before giving up")
@click.option(
    "--retry-interval",
    type=click.IntRange(min=0),
    help="Milliseconds between attempts",
)
@click.option("--timeout", type=click.IntRange(min=1), help="Per-attempt timeout in milliseconds")
@click.pass_context
def ping(
    ctx,
    url: str,
    max_attempts: Optional[int],
    retry_interval: Optional[int],
    timeout: Optional[int],
):
    """Ping a single URL with retries.

    URL: Target to ping; exits with status 1 if every attempt fails
    """
    config_manager = _load_config(ctx)

    overrides = {
        "max_attempts": max_attempts,
        "retry_interval_ms": retry_interval,
        "timeout_ms": timeout,
    }
    retry_config = config_manager.get_retry_config().model_copy(
        update={k: v for k, v in overrides.items() if v is not None}
    )

    result = PingService(retry_config).ping(url)
    if result.succeeded:
        click.echo(f"{url}: OK after {result.attempts} attempt(s)")
        return

    last = result.last_outcome
    reason = last.describe() if last else "no attempts"
    click.echo(f"{url}: FAILED after {result.attempts} attempt(s) ({reason})", err=True)
    sys.exit(1)


def main():
    """Main entry point"""
    cli(obj={})


if __name__ == "__main__":
    main()
