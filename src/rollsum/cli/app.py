from __future__ import annotations

from typing import Optional

import httpx
import typer
import uvicorn
from rich.console import Console
from rich.markup import escape

from rollsum.clients.metrics_client import MetricsClient, MetricsClientError
from rollsum.config.settings import settings

app = typer.Typer(help="rollsum CLI (serve the API, record values, read hourly sums).")
console = Console()


@app.command("serve")
def serve_cmd(
    host: str = typer.Option(settings.host, help="Interface to bind."),
    port: int = typer.Option(settings.port, help="Port to listen on."),
) -> None:
    """Run the HTTP service."""
    uvicorn.run("rollsum.api.main:app", host=host, port=port)


@app.command("record")
def record_cmd(
    key: str = typer.Argument(..., help="Metric key."),
    value: int = typer.Argument(..., help="Integer value to add."),
    base_url: Optional[str] = typer.Option(None, help="Service URL (defaults to ROLLSUM_BASE_URL)."),
) -> None:
    """Record a value for a key."""
    client = MetricsClient(base_url=base_url)
    try:
        client.record(key, value)
    except (MetricsClientError, httpx.HTTPError) as exc:
        console.print(f"[red]✗[/red] {escape(str(exc))}")
        raise typer.Exit(code=1)
    console.print(f"[green]✓[/green] recorded {key}={value}")


@app.command("sum")
def sum_cmd(
    key: str = typer.Argument(..., help="Metric key."),
    base_url: Optional[str] = typer.Option(None, help="Service URL (defaults to ROLLSUM_BASE_URL)."),
) -> None:
    """Print the rolling one-hour sum for a key."""
    client = MetricsClient(base_url=base_url)
    try:
        total = client.sum(key)
    except (MetricsClientError, httpx.HTTPError) as exc:
        console.print(f"[red]✗[/red] {escape(str(exc))}")
        raise typer.Exit(code=1)
    console.print(f"[bold]{key}[/bold] = [cyan]{total}[/cyan]")
