"""Command-line interface for the trade journal."""

from __future__ import annotations

import json
from pathlib import Path

import typer
from loguru import logger
from rich.console import Console
from rich.table import Table

from tradejournal.config.settings import get_settings, setup_logging
from tradejournal.core.errors import InvalidInputError, TradeJournalError
from tradejournal.storage import get_trade_store

app = typer.Typer(
    name="tradejournal",
    help="Personal trading journal backend",
    add_completion=False,
)
console = Console()


@app.callback()
def main_callback() -> None:
    """Initialize logging on startup."""
    settings = get_settings()
    setup_logging(settings)


def _format_pl(value: float) -> str:
    if value >= 0:
        return f"[green]+${value:,.2f}[/green]"
    return f"[red]-${abs(value):,.2f}[/red]"


@app.command()
def serve(
    host: str | None = typer.Option(None, "--host", help="Bind address"),
    port: int | None = typer.Option(None, "--port", "-p", help="Port to listen on"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
) -> None:
    """Run the HTTP API server."""
    import uvicorn

    settings = get_settings()
    host = host or settings.host
    port = port or settings.port

    logger.info(f"Server running at http://{host}:{port}")
    logger.info(f"API available at http://{host}:{port}/api/trades")

    uvicorn.run(
        "tradejournal.api.app:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


@app.command("trades")
def list_trades(
    limit: int = typer.Option(20, "--limit", "-l", help="Number of trades to show"),
) -> None:
    """List the most recent trades."""
    settings = get_settings()
    store = get_trade_store(settings.trades_path)

    try:
        trades = store.list_trades()
    except TradeJournalError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from e

    if not trades:
        console.print("[yellow]No trades found.[/yellow]")
        return

    shown = trades[-limit:] if limit > 0 else trades
    console.print(
        f"\n[bold blue]Trade Journal[/bold blue] ({len(shown)} of {len(trades)})\n"
    )

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("ID", style="dim")
    table.add_column("Created")
    table.add_column("Status")
    table.add_column("Result", justify="right")
    table.add_column("Other fields")

    for trade in shown:
        if not isinstance(trade, dict):
            table.add_row("", "", "", "", json.dumps(trade))
            continue

        status = str(trade.get("status", ""))
        if status == "win":
            status = "[green]win[/green]"
        elif status == "loss":
            status = "[red]loss[/red]"

        result = trade.get("result")
        result_str = _format_pl(result) if isinstance(result, int | float) else "-"

        extra = {
            k: v
            for k, v in trade.items()
            if k not in ("id", "createdAt", "status", "result")
        }
        table.add_row(
            str(trade.get("id", "")),
            str(trade.get("createdAt", ""))[:19],
            status,
            result_str,
            ", ".join(f"{k}={v}" for k, v in extra.items()),
        )

    console.print(table)
    console.print(f"\n[dim]Document: {store.path}[/dim]\n")


@app.command("metrics")
def show_metrics() -> None:
    """Show journal summary statistics."""
    settings = get_settings()
    store = get_trade_store(settings.trades_path)

    try:
        metrics = store.get_metrics()
    except TradeJournalError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from e

    if metrics.total_trades == 0:
        console.print("[yellow]No trades found.[/yellow]")
        return

    console.print("\n[bold blue]Journal Metrics[/bold blue]\n")

    table = Table(show_header=False)
    table.add_column("Metric", style="dim")
    table.add_column("Value", justify="right")

    table.add_row("Total Trades", str(metrics.total_trades))
    table.add_row("Winning Trades", str(metrics.win_trades))
    table.add_row("Losing Trades", str(metrics.loss_trades))
    table.add_row("Win Rate", f"{metrics.win_rate:.1f}%")
    table.add_row("", "")
    table.add_row("Total P&L", _format_pl(metrics.total_pl))
    table.add_row("Avg Win", f"${metrics.avg_win:,.2f}")
    table.add_row("Avg Loss", f"${metrics.avg_loss:,.2f}")

    console.print(table)
    console.print()


@app.command("export")
def export_trades(
    output: Path = typer.Argument(
        Path("trades-backup.json"), help="Output file path"
    ),
    fmt: str = typer.Option("json", "--format", "-f", help="Format: 'json' or 'csv'"),
) -> None:
    """Export the journal to a JSON backup or CSV file."""
    settings = get_settings()
    store = get_trade_store(settings.trades_path)

    try:
        if fmt == "json":
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_text(store.export_trades(), encoding="utf-8")
            count = len(store.list_trades())
        elif fmt == "csv":
            count = store.export_trades_csv(output)
        else:
            console.print(f"[red]Unknown format: {fmt}[/red]")
            raise typer.Exit(1)
    except TradeJournalError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from e

    if count > 0:
        console.print(f"[green]Exported {count} trades to {output}[/green]")
    else:
        console.print("[yellow]No trades to export[/yellow]")


@app.command("import")
def import_trades(
    source: Path = typer.Argument(..., help="JSON backup file to import"),
    yes: bool = typer.Option(
        False, "--yes", "-y", help="Replace the journal without asking"
    ),
) -> None:
    """Replace the journal with the trades in a JSON backup."""
    settings = get_settings()
    store = get_trade_store(settings.trades_path)

    try:
        payload = json.loads(source.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        console.print(f"[red]Cannot read {source}: {e}[/red]")
        raise typer.Exit(1) from e

    if not yes:
        typer.confirm(
            f"Replace all trades in {store.path} with {source}?", abort=True
        )

    try:
        count = store.import_trades(payload)
    except InvalidInputError as e:
        console.print(f"[red]{e.public_message}[/red]")
        raise typer.Exit(1) from e
    except TradeJournalError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from e

    console.print(f"[green]Imported {count} trades into {store.path}[/green]")


@app.command()
def version() -> None:
    """Show version information."""
    from tradejournal import __version__

    console.print(f"Trade journal version {__version__}")


@app.command("config")
def show_config() -> None:
    """Show the effective configuration."""
    settings = get_settings()

    table = Table(show_header=False)
    table.add_column("Setting", style="dim")
    table.add_column("Value")

    table.add_row("Trades document", str(settings.trades_path))
    table.add_row("Server", f"http://{settings.host}:{settings.port}")
    table.add_row("CORS origins", ", ".join(settings.cors_origins))
    table.add_row("Front-end", str(settings.index_path or "[dim]not configured[/dim]"))
    table.add_row("Log level", settings.log_level)
    table.add_row(
        "Log directory",
        str(settings.logs_path) if settings.log_to_file else "[dim]disabled[/dim]",
    )

    console.print("\n[bold blue]Trade Journal Configuration[/bold blue]\n")
    console.print(table)
    console.print()


if __name__ == "__main__":
    app()
