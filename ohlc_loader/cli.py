"""CLI entry point for the OHLC loader."""

from datetime import date, timedelta

import click

from ohlc_loader.core.config import settings
from ohlc_loader.core.logging_config import setup_logging
from ohlc_loader.data.downloader import Downloader, FetchStatus
from ohlc_loader.data.ticker_utils import canonical_ticker


@click.group()
def cli():
    """Historical OHLC downloader CLI."""
    setup_logging()


@cli.command()
@click.argument("symbols", nargs=-1, required=True)
@click.option(
    "--days-back",
    type=click.IntRange(min=0),
    default=None,
    help="Lookback window in days (default from config)",
)
@click.option("--overwrite", is_flag=True, help="Refetch the whole window even if rows are stored")
@click.option(
    "--buffer-size",
    type=click.IntRange(min=0),
    default=None,
    help="Buffered writes before a flush (default from config)",
)
@click.option("--no-flush", is_flag=True, help="Do not flush remaining writes at the end")
def fetch(symbols: tuple[str, ...], days_back: int | None, overwrite: bool, buffer_size: int | None, no_flush: bool):
    """Fetch historical bars for SYMBOLS into storage."""
    days_back = days_back if days_back is not None else settings.default_days_back

    click.echo(f"Fetching {len(symbols)} symbols, {days_back} days back...")

    downloader = Downloader(buffer_size=buffer_size)
    batch = downloader.fetch_symbols_result(
        list(symbols), days_back, overwrite=overwrite, flush_on_complete=not no_flush
    )

    for result in batch.symbols:
        if result.status == FetchStatus.FAILED:
            click.echo(f"{result.symbol}: failed - {result.error}", err=True)
        elif result.status == FetchStatus.UP_TO_DATE:
            click.echo(f"{result.symbol}: up to date")
        else:
            click.echo(
                f"{result.symbol}: {result.inserts} new, {result.updates} updated "
                f"({result.window.start} to {result.window.end})"
            )

    if batch.flush is not None:
        if batch.flush.ok:
            click.echo(f"Stored {batch.flush.inserted} new and {batch.flush.updated} updated bars")
        else:
            click.echo(f"Error: final flush failed - {batch.flush.error}", err=True)
    if downloader.pending:
        click.echo(f"Warning: {downloader.pending} writes left unflushed", err=True)


@cli.command()
@click.argument("symbols", nargs=-1, required=True)
def quotes(symbols: tuple[str, ...]):
    """Fetch current quotes for SYMBOLS (not implemented)."""
    downloader = Downloader()
    downloader.fetch_current_quotes(list(symbols))
    click.echo("Current quotes are not implemented; nothing fetched.")


@cli.command()
@click.argument("ticker")
@click.option("--start", help="Start date (YYYY-MM-DD), defaults to 30 days ago")
@click.option("--end", help="End date (YYYY-MM-DD), defaults to today")
def show(ticker: str, start: str | None, end: str | None):
    """Print stored bars for TICKER."""
    from ohlc_loader.storage.duckdb_repository import DuckDBBarRepository

    try:
        end_date = date.fromisoformat(end) if end else date.today()
        start_date = date.fromisoformat(start) if start else end_date - timedelta(days=30)
        ticker = canonical_ticker(ticker)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        raise click.Abort()

    bars = DuckDBBarRepository().get_bars(ticker, start_date, end_date)
    if bars.empty:
        click.echo(f"No stored bars for {ticker} from {start_date} to {end_date}")
        return

    click.echo(bars.to_string(index=False))


if __name__ == "__main__":
    cli()
