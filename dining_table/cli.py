"""Typer CLI entrypoint for the dining table simulation."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .config import ConfigError, InvalidSeatCount, configured_seats, load_config, parse_seat_count
from .logging_utils import configure_logging
from .table import DiningTable, SimulationTimeout, ring_pairs

app = typer.Typer(help="Dining philosophers simulation with a single table-wide lock")
console = Console()


def _read_seats(seats: Optional[object]) -> int:
    raw = seats if seats is not None else typer.prompt("Enter the number of philosophers")
    try:
        return parse_seat_count(raw)
    except InvalidSeatCount as exc:
        console.print(str(exc))
        raise typer.Exit(code=0)


@app.command()
def run(
    seats: Optional[str] = typer.Option(None, "--seats", help="Number of philosophers (3-10)"),
    config_path: Optional[Path] = typer.Option(None, "--config", help="YAML table configuration"),
    time_scale: Optional[float] = typer.Option(None, help="Real seconds per simulated second"),
    seed: Optional[int] = typer.Option(None, help="Seed for reproducible sleep durations"),
    log_file: Optional[Path] = typer.Option(None, help="Write JSON lines logs to this path"),
    export: Optional[Path] = typer.Option(None, help="Write the final report as JSON"),
    timeout: Optional[float] = typer.Option(None, help="Abort if the table runs longer (wall seconds)"),
) -> None:
    """Seat the philosophers and run until every one has eaten enough.

    The seat count comes from ``--seats``, then the config file, then a prompt.
    """

    try:
        configured = seats if seats is not None else configured_seats(config_path)
    except ConfigError as exc:
        console.print(f"[bold red]Invalid configuration:[/] {escape(str(exc))}")
        raise typer.Exit(code=2)
    count = _read_seats(configured)
    try:
        config = load_config(
            config_path,
            seats=count,
            time_scale=time_scale,
            seed=seed,
            log_file=str(log_file) if log_file else None,
        )
    except (ConfigError, ValidationError) as exc:
        console.print(f"[bold red]Invalid configuration:[/] {escape(str(exc))}")
        raise typer.Exit(code=2)

    configure_logging(config.log_file)
    table = DiningTable(config)
    table.build_ring()
    try:
        report = table.run_all(timeout=timeout)
    except SimulationTimeout as exc:
        console.print(f"[bold red]{escape(str(exc))}[/]")
        raise typer.Exit(code=1)
    except KeyboardInterrupt:
        table.interrupt()
        raise typer.Exit(code=130)

    report.render(console)
    if export:
        export.parent.mkdir(parents=True, exist_ok=True)
        export.write_text(report.model_dump_json(indent=2), encoding="utf-8")
        console.print(f"Report saved to {export}")


@app.command()
def ring(seats: str = typer.Option(..., "--seats", help="Number of philosophers (3-10)")) -> None:
    """Show which forks each philosopher shares."""

    count = _read_seats(seats)
    table = Table(title=f"Fork ring for {count} philosophers")
    table.add_column("Philosopher", justify="right")
    table.add_column("Left fork", justify="right")
    table.add_column("Right fork", justify="right")
    for index, (left, right) in enumerate(ring_pairs(count)):
        table.add_row(str(index + 1), str(left + 1), str(right + 1))
    console.print(table)


def main() -> None:
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
