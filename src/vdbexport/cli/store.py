"""Store subcommand: stats."""

from __future__ import annotations

import typer

from vdbexport.errors import StoreOpenError
from vdbexport.export.trades import open_store
from vdbexport.storage.kv import store_stats

app = typer.Typer(help="Inspect the key-value store")


@app.command("stats")
def stats(
    ctx: typer.Context,
    db: str | None = typer.Option(None, "--db", help="Store path (overrides config)"),
) -> None:
    """Show key counts for the trade and market prefixes."""
    settings = ctx.obj["settings"]
    try:
        conn = open_store(db or settings.db_path)
    except StoreOpenError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(1)
    try:
        s = store_stats(conn, {"trades": settings.trade_prefix, "markets": settings.market_prefix})
        typer.echo(f"Total keys: {s['total_keys']}")
        typer.echo(f"Trade records ({settings.trade_prefix.decode()}): {s['trades']}")
        typer.echo(f"Market records ({settings.market_prefix.decode()}): {s['markets']}")
    finally:
        conn.close()
