"""
Command-line interface for seriestrim.

Provides commands for reducing sample files, inspecting reduction statistics,
and managing persisted optimizer defaults.
"""

import logging

from collections.abc import Callable
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version
from pathlib import Path
from typing import Any

import click

from seriestrim.config import (
    OPTIMIZER_SECTION,
    get_config_path,
    load_config,
    load_optimizer_config,
    set_optimizer_default,
    unset_optimizer_default,
)
from seriestrim.constants import NonFinitePolicy, TimeWindow
from seriestrim.loaders import dump_samples, load_samples
from seriestrim.logging_config import setup_logging
from seriestrim.models.statistics import DataStatistics
from seriestrim.optimizer import ChartOptimizer
from seriestrim.reduction.normalizer import NonFiniteValueError
from seriestrim.types import ConfigurationError

logger = logging.getLogger(__name__)

try:
    __version__ = get_version("seriestrim")
except PackageNotFoundError:
    __version__ = "dev"

WINDOW_CHOICES = [w.value for w in TimeWindow if w != TimeWindow.NONE]


def optimizer_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Attach the options shared by every command that reads samples."""
    func = click.option(
        "--value-field", default="value", show_default=True, help="Value column"
    )(func)
    func = click.option(
        "--timestamp-field",
        default="timestamp",
        show_default=True,
        help="Timestamp column",
    )(func)
    func = click.option(
        "--non-finite",
        type=click.Choice([p.value for p in NonFinitePolicy]),
        help="How to treat NaN/inf values (default: reject)",
    )(func)
    func = click.option(
        "--threshold",
        type=int,
        help="Decimate only above this many samples (default: 2000)",
    )(func)
    func = click.option(
        "--max-points", "-n", type=int, help="Maximum output points (default: 1000)"
    )(func)
    func = click.argument("path", type=click.Path(exists=True, dir_okay=False))(func)
    return func


def run_optimizer(
    path: str,
    max_points: int | None,
    threshold: int | None,
    non_finite: str | None,
    timestamp_field: str,
    value_field: str,
) -> ChartOptimizer:
    """
    Load a sample file and run it through a ChartOptimizer.

    Raises:
        click.ClickException: If options or file contents are invalid
    """
    try:
        config = load_optimizer_config(
            max_points=max_points,
            decimation_threshold=threshold,
            non_finite=non_finite,
        )
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e

    try:
        samples = load_samples(path, timestamp_field, value_field)
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    optimizer = ChartOptimizer(config)
    try:
        optimizer.update(samples)
    except NonFiniteValueError as e:
        optimizer.close()
        raise click.ClickException(
            f"{e}. Use --non-finite filter or --non-finite propagate to continue."
        ) from e

    return optimizer


def echo_statistics(stats: DataStatistics, err: bool = False) -> None:
    """Print a statistics table."""
    click.echo("\n📊 Reduction Statistics", err=err)
    click.echo(f"{'=' * 40}", err=err)
    click.echo(f"Original points:  {stats.original_count:,}", err=err)
    click.echo(f"Optimized points: {stats.optimized_count:,}", err=err)
    click.echo(f"Reduction:        {stats.reduction_ratio * 100:.1f}%", err=err)
    click.echo(f"Decimated:        {'yes' if stats.is_decimated else 'no'}", err=err)
    click.echo(f"Memory estimate:  {stats.memory_estimate / 1024:.1f} KB", err=err)
    click.echo(f"{'=' * 40}\n", err=err)


def write_output(text: str, output: str | None) -> None:
    """Write text to a file, or stdout when no file is given."""
    if output:
        Path(output).write_text(text + "\n", encoding="utf-8")
        click.echo(f"✓ Wrote {output}", err=True)
    else:
        click.echo(text)


def version_callback(ctx: click.Context, param: click.Parameter, value: bool) -> None:
    """Show version."""
    if not value or ctx.resilient_parsing:
        return
    click.echo(f"seriestrim, version {__version__}")
    ctx.exit()


@click.group()
@click.option(
    "--version",
    is_flag=True,
    callback=version_callback,
    expose_value=False,
    is_eager=True,
    help="Show version",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
def cli(verbose: bool) -> None:
    """seriestrim: time-series reduction for interactive charts"""
    setup_logging(verbose=verbose, console_format="%(levelname)s: %(message)s")


@cli.command()
@optimizer_options
@click.option("--output", "-o", type=click.Path(dir_okay=False), help="Output file")
def reduce(
    path: str,
    max_points: int | None,
    threshold: int | None,
    non_finite: str | None,
    timestamp_field: str,
    value_field: str,
    output: str | None,
) -> None:
    """Decimate a sample file and write the result as JSON."""
    with run_optimizer(
        path, max_points, threshold, non_finite, timestamp_field, value_field
    ) as optimizer:
        write_output(dump_samples(optimizer.optimized_data), output)
        echo_statistics(optimizer.statistics, err=True)


@cli.command()
@optimizer_options
@click.option(
    "--window",
    "-w",
    type=click.Choice(WINDOW_CHOICES),
    required=True,
    help="Aggregation window",
)
@click.option("--output", "-o", type=click.Path(dir_okay=False), help="Output file")
def aggregate(
    path: str,
    max_points: int | None,
    threshold: int | None,
    non_finite: str | None,
    timestamp_field: str,
    value_field: str,
    window: str,
    output: str | None,
) -> None:
    """Decimate a sample file, then average it into time windows."""
    with run_optimizer(
        path, max_points, threshold, non_finite, timestamp_field, value_field
    ) as optimizer:
        aggregated = optimizer.get_aggregated_data(window)
        write_output(dump_samples(aggregated), output)
        click.echo(
            f"Aggregated {optimizer.statistics.optimized_count:,} points into "
            f"{len(aggregated):,} {window} windows",
            err=True,
        )


@cli.command()
@optimizer_options
def stats(
    path: str,
    max_points: int | None,
    threshold: int | None,
    non_finite: str | None,
    timestamp_field: str,
    value_field: str,
) -> None:
    """Show how much a sample file would be reduced."""
    with run_optimizer(
        path, max_points, threshold, non_finite, timestamp_field, value_field
    ) as optimizer:
        echo_statistics(optimizer.statistics)


@cli.group()
def config() -> None:
    """Configuration management commands."""
    pass


@config.command("show")
def show_config_cmd() -> None:
    """Show all configuration settings."""
    config_path = get_config_path()
    if not config_path.exists():
        click.echo(f"No config file: {config_path}")
        return

    click.echo(f"Config file: {config_path}\n")
    config_data = load_config()
    if not config_data:
        click.echo("Configuration is empty.")
        return

    click.echo("Settings:")
    for section, values in config_data.items():
        if not isinstance(values, dict):
            continue
        click.echo(f"  [{section}]")
        for key, value in values.items():
            click.echo(f"    {key} = {value!r}")


@config.command("set")
@click.argument("key")
@click.argument("value")
def set_config_cmd(key: str, value: str) -> None:
    """Set a persisted optimizer default (e.g. max_points 500)."""
    try:
        validated = set_optimizer_default(key, value)
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e

    stored = validated.model_dump(mode="json")[key]
    click.echo(f"✓ {OPTIMIZER_SECTION}.{key} = {stored}")
    click.echo(f"  Config: {get_config_path()}")


@config.command("unset")
@click.argument("key")
def unset_config_cmd(key: str) -> None:
    """Remove a persisted optimizer default."""
    if unset_optimizer_default(key):
        click.echo(f"✓ Removed {OPTIMIZER_SECTION}.{key}")
    else:
        click.echo(f"No {OPTIMIZER_SECTION}.{key} was configured.")
