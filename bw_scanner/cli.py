"""
Click CLI for the buy-write scanner.

Commands:
  bw-scan scan   Run the full scan and print the report (or JSON)
  bw-scan vix    Show only the volatility regime
"""

import json
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional

import click

from .config import ScannerConfig, TradierConfig
from .exceptions import ConfigurationError, ScanAbortedError, ScanError
from .formatters import format_report, scan_result_to_dict
from .scanner import BWScanner
from .signals import VolatilityGate, regime_message
from .tradier import TradierClient
from .utils import utc_today

logger = logging.getLogger(__name__)


def _print_error(message: str) -> None:
    """Print error message to stderr."""
    click.secho(f"Error: {message}", fg="red", err=True)


def _make_client() -> TradierClient:
    """Build the Tradier client from the token file or TRADIER_TOKEN."""
    return TradierClient(TradierConfig.load())


@click.group()
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    envvar="BW_CONFIG",
    help="Scanner config YAML (default: ~/.bw_scanner/config.yaml)",
)
@click.option("--tickers", help="Comma-separated tickers, overrides config")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: Optional[Path],
    tickers: Optional[str],
    verbose: bool,
) -> None:
    """
    BW Scanner - covered call candidates for leveraged ETFs.

    Gates on VIX, checks each ticker's drawdown from its smoothed 12-week
    high and scores the nearest weekly calls around spot.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    ctx.ensure_object(dict)

    try:
        config = ScannerConfig.load_from_file(config_path)
        if tickers:
            config = replace(config, tickers=tickers.split(","))
    except ConfigurationError as e:
        _print_error(str(e))
        sys.exit(1)

    ctx.obj["config"] = config
    ctx.obj["verbose"] = verbose


@cli.command()
@click.option("--json", "output_json", is_flag=True, help="JSON output")
@click.pass_context
def scan(ctx: click.Context, output_json: bool) -> None:
    """
    Run the full buy-write scan.

    \b
    Examples:
      bw-scan scan
      bw-scan --tickers TSLA,SOXL scan --json
    """
    config: ScannerConfig = ctx.obj["config"]

    try:
        with _make_client() as client:
            result = BWScanner(client, config).run()
    except (ConfigurationError, ScanAbortedError) as e:
        if output_json:
            click.echo(json.dumps({"error": str(e)}))
        else:
            _print_error(str(e))
        sys.exit(1)

    if output_json:
        click.echo(json.dumps(scan_result_to_dict(result), indent=2, ensure_ascii=False))
    else:
        click.echo(format_report(result))


@cli.command()
@click.pass_context
def vix(ctx: click.Context) -> None:
    """Show VIX relative to its 20-day average and the resulting regime."""
    config: ScannerConfig = ctx.obj["config"]

    try:
        with _make_client() as client:
            reading, regime = VolatilityGate(client, config).evaluate(utc_today())
    except ScanError as e:
        _print_error(str(e))
        sys.exit(1)

    click.echo(regime_message(reading.ratio, regime, config.volatility_symbol))
    if ctx.obj["verbose"]:
        click.echo(f"Last close: {reading.last_close:.2f}")
        click.echo(f"SMA{config.sma_window}:     {reading.sma:.2f}")


def main() -> None:
    """Console script entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()
