"""
Command-line interface for mining reports.

Provides commands for:
- send: Generate a report and email it
- rates: Show the exchange rates a report would use
- credits: Show recent pool credits with fiat values
- preview: Render the 24-hour report to an HTML file without sending
"""

import logging
import sys
from pathlib import Path

import click

from mining_reports import __version__
from mining_reports.config import ConfigurationError
from mining_reports.data.providers.base import ProviderError
from mining_reports.email_reports.generator import format_credits_table
from mining_reports.email_reports.sender import save_email_html
from mining_reports.models import ReportMethod
from mining_reports.reports.manager import ReportError, ReportManager


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )


def _load_manager(config: str) -> ReportManager:
    try:
        return ReportManager.from_file(config)
    except ConfigurationError as e:
        click.echo(f"Error loading config: {e}", err=True)
        sys.exit(1)
    except ProviderError as e:
        click.echo(f"Error fetching exchange rates: {e}", err=True)
        sys.exit(1)


config_option = click.option(
    "--config", "-c",
    required=True,
    type=click.Path(exists=True),
    help="Path to report configuration YAML file",
)


@click.group()
@click.version_option(version=__version__, prog_name="mining-reports")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def main(verbose: bool):
    """
    Mining farm bookkeeping reports.

    Pulls credited coins from a mining pool, converts them to USD and a
    local currency, and emails the result.
    """
    _configure_logging(verbose)


@main.command()
@config_option
@click.option(
    "--method", "-m",
    default=ReportMethod.RECENT_CREDITS_24_HOURS.value,
    show_default=True,
    help=f"Report method, one of {ReportMethod.allowed()}",
)
def send(config: str, method: str):
    """Generate a report and send it by email."""
    manager = _load_manager(config)

    try:
        manager.create_report_and_send(method)
    except (ReportError, ProviderError) as e:
        click.echo(f"Error sending report: {e}", err=True)
        sys.exit(1)

    click.echo(f"Report '{method}' sent to {manager.config.to_email}")


@main.command()
@config_option
def rates(config: str):
    """Show the cached exchange rates."""
    manager = _load_manager(config)
    cfg = manager.config

    click.echo(f"{cfg.crypto_symbol} -> USD: {manager.crypto_usd}")
    click.echo(f"USD -> {cfg.local_currency}: {manager.usd_local}")


@main.command()
@config_option
@click.option("--days", "-d", type=click.IntRange(min=0), default=None, help="Only show the most recent N days")
def credits(config: str, days: int | None):
    """Show recent pool credits with their fiat values."""
    manager = _load_manager(config)
    cfg = manager.config

    try:
        last_24, history = manager.get_dashboard_credits()
    except ProviderError as e:
        click.echo(f"Error fetching pool data: {e}", err=True)
        sys.exit(1)

    usd_value = manager.rates.to_usd(last_24.amount)
    local_value = manager.rates.to_local(usd_value)
    click.echo(f"Last 24 hours: {last_24.amount} {cfg.crypto_symbol}")
    click.echo(f"  USD value: {usd_value}")
    click.echo(f"  {cfg.local_currency} value: {local_value}")

    if days is not None:
        history = history[:days]

    if history:
        click.echo("")
        click.echo("Daily credits:")
        for line in format_credits_table(
            history, manager.crypto_usd, manager.usd_local, cfg.local_currency
        ):
            click.echo(f"  {line}")


@main.command()
@config_option
@click.option(
    "--output", "-o",
    required=True,
    type=click.Path(),
    help="Where to write the rendered HTML",
)
def preview(config: str, output: str):
    """Render the 24-hour report to a file without sending it."""
    manager = _load_manager(config)

    try:
        last_24 = manager.get_recent_credits_24hours()
    except ProviderError as e:
        click.echo(f"Error fetching pool data: {e}", err=True)
        sys.exit(1)

    usd_value = manager.rates.to_usd(last_24.amount)
    local_value = manager.rates.to_local(usd_value)
    html = manager.render_24_hour_email(last_24.amount, usd_value, local_value)

    save_email_html(html, Path(output))
    click.echo(f"Report preview saved to: {output}")


if __name__ == "__main__":
    main()
