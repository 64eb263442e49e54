"""Trades subcommand: export."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import typer

from vdbexport.config import load_whitelist
from vdbexport.errors import ExportError
from vdbexport.export import CompletionSignal, ExportStats, PipelineConfig, export_trades
from vdbexport.export.trades import open_store
from vdbexport.storage.markets import load_markets

app = typer.Typer(help="Trade record export")


@app.command("export")
def export(
    ctx: typer.Context,
    db: str | None = typer.Option(None, "--db", help="Store path (overrides config)"),
    chain_id: str | None = typer.Option(None, "--chain-id", "-c", help="Chain ID (overrides config)"),
    output_dir: str | None = typer.Option(None, "--output-dir", "-o", help="Directory for trades-<chain>.csv"),
    whitelist: str | None = typer.Option(None, "--whitelist", "-w", help="Whitelist file, one party per line"),
    exclude: bool | None = typer.Option(
        None, "--exclude/--no-exclude", help="Drop bot<>bot trades instead of tagging them"
    ),
    batch_size: int | None = typer.Option(None, "--batch-size", help="Records per pause"),
    wait: float | None = typer.Option(None, "--wait", help="Pause length in seconds"),
) -> None:
    """Export all trade records to CSV."""
    settings = ctx.obj["settings"]
    db_path = db or settings.db_path
    try:
        conn = open_store(db_path)
        try:
            markets = load_markets(conn, settings.market_prefix)
        finally:
            conn.close()
        parties = load_whitelist(whitelist or settings.whitelist_path)
    except (ExportError, OSError) as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(1)

    stats = ExportStats()
    try:
        config = PipelineConfig.from_settings(
            settings,
            whitelist=parties,
            stats=stats,
            chain_id=chain_id,
            exclude=exclude,
            batch_size=batch_size,
            wait_sec=wait,
        )
    except ValueError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(1)

    completion = CompletionSignal(1)
    with ThreadPoolExecutor(max_workers=1) as pool:
        future = pool.submit(
            export_trades, db_path, config, markets, completion, output_dir or settings.output_dir
        )
        completion.wait()
        try:
            result = future.result()
        except ExportError as e:
            typer.echo(f"Export failed: {e}", err=True)
            raise typer.Exit(1)

    typer.echo(f"Total trades: {stats.total_trades.value}")
    typer.echo(f"Excluded trades: {stats.excluded_trades.value}")
    typer.echo(f"Rows written: {result.rows_written} -> {result.output_path}")
    if not result.completed:
        typer.echo(f"Scan aborted: {result.error}", err=True)
        raise typer.Exit(1)
