"""Typer-based CLI entry point."""

from __future__ import annotations

import logging
import math
import numbers
from typing import Any

import numpy as np
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from . import __version__
from .core import InvalidParameterError, InversionError
from .distributions import Distribution, Frozen, get_distribution, list_distributions
from .tables import OPERATIONS, moments_frame, tabulate

app = typer.Typer(help="statdist probability distribution CLI.")
console = Console()

VERBOSE_OPTION = typer.Option(False, "--verbose", "-v", help="Enable verbose output.")
VERSION_OPTION = typer.Option(False, "--version", help="Show version and exit.")

NAME_ARGUMENT = typer.Argument(..., help="Registered distribution name (see `registry`).")

PARAM_OPTION = typer.Option(
    None,
    "--param",
    "-p",
    help="Distribution parameter as key=value (repeat for multiples).",
    show_default=False,
)

MOMENTS_OPTION = typer.Option(
    "mv",
    "--moments",
    "-m",
    help="Moments to compute: m (mean), v (variance), s (skew), k (kurtosis).",
    show_default=True,
)

START_OPTION = typer.Option(0.0, "--start", help="First tabulated point.", show_default=True)
STOP_OPTION = typer.Option(10.0, "--stop", help="Last tabulated point.", show_default=True)
NUM_OPTION = typer.Option(11, "--num", help="Number of tabulated points.", show_default=True)

SIZE_OPTION = typer.Option(10, "--size", "-n", help="Number of variates to draw.")
SEED_OPTION = typer.Option(
    None,
    "--seed",
    help="Seed for the random source (fresh entropy when omitted).",
    show_default=False,
)

_LIBRARY_ERRORS = (InvalidParameterError, InversionError, KeyError, TypeError, ValueError)


@app.callback(invoke_without_command=True)
def cli_callback(  # noqa: B008
    ctx: typer.Context,
    verbose: bool = VERBOSE_OPTION,
    version: bool = VERSION_OPTION,
) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )
    if verbose or version:
        console.print(f"[bold green]statdist {__version__}[/bold green]")
    if ctx.invoked_subcommand is None and not ctx.resilient_parsing:
        raise typer.Exit()


@app.command()
def registry() -> None:
    """List registered distributions."""
    table = Table(title="Registered Distributions")
    table.add_column("Name")
    table.add_column("Kind")
    table.add_column("Parameters")
    table.add_column("Description", overflow="fold")
    for name in list_distributions():
        dist = get_distribution(name)
        params = ", ".join(dist.parameters)
        notes = dist.notes or ""
        table.add_row(dist.name, dist.kind, params, notes)
    console.print(table)


@app.command()
def evaluate(  # noqa: B008
    name: str = NAME_ARGUMENT,
    operation: str = typer.Argument(..., help=f"One of: {', '.join(OPERATIONS)}."),
    value: float = typer.Argument(..., help="Query point (a probability for ppf/isf)."),
    params: list[str] | None = PARAM_OPTION,
) -> None:
    """Evaluate a single operation of a distribution."""
    if operation not in OPERATIONS:
        console.print(f"[red]Unknown operation '{operation}'.[/red]")
        raise typer.Exit(code=1)
    frozen = _freeze(name, params)
    try:
        result = getattr(frozen, operation)(value)
    except _LIBRARY_ERRORS as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc
    console.print(f"{frozen!r}.{operation}({value:g}) = {_format_metric(result)}")


@app.command()
def stats(  # noqa: B008
    name: str = NAME_ARGUMENT,
    moments: str = MOMENTS_OPTION,
    params: list[str] | None = PARAM_OPTION,
) -> None:
    """Print the requested moments of a distribution."""
    frozen = _freeze(name, params)
    try:
        frame = moments_frame({repr(frozen): frozen}, moments)
    except _LIBRARY_ERRORS as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc
    table = Table(title="Moments")
    for column in frame.columns:
        table.add_column(str(column), justify="left" if column == "distribution" else "right")
    for record in frame.itertuples(index=False):
        table.add_row(str(record[0]), *(_format_metric(v) for v in record[1:]))
    console.print(table)


@app.command("table")
def table_command(  # noqa: B008
    name: str = NAME_ARGUMENT,
    start: float = START_OPTION,
    stop: float = STOP_OPTION,
    num: int = NUM_OPTION,
    params: list[str] | None = PARAM_OPTION,
) -> None:
    """Tabulate density, cumulative and survival values over a grid."""
    frozen = _freeze(name, params)
    native = "pmf" if frozen.distribution.kind == "discrete" else "pdf"
    try:
        frame = tabulate(frozen, np.linspace(start, stop, num), (native, "cdf", "sf"))
    except _LIBRARY_ERRORS as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc
    table = Table(title=repr(frozen), expand=True)
    for column in frame.columns:
        table.add_column(str(column), justify="right", no_wrap=True)
    for record in frame.itertuples(index=False):
        table.add_row(*(_format_metric(v) for v in record))
    console.print(table)


@app.command()
def sample(  # noqa: B008
    name: str = NAME_ARGUMENT,
    size: int = SIZE_OPTION,
    seed: int | None = SEED_OPTION,
    params: list[str] | None = PARAM_OPTION,
) -> None:
    """Draw variates from a distribution."""
    frozen = _freeze(name, params)
    rng = np.random.default_rng(seed)
    try:
        draws = [frozen.rvs(random_state=rng) for _ in range(size)]
    except _LIBRARY_ERRORS as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc
    console.print(" ".join(_format_metric(draw) for draw in draws))


def main_entry() -> None:
    app()


def main() -> None:  # pragma: no cover - console entry
    main_entry()


def _parse_params(raw: list[str] | None) -> dict[str, float]:
    parsed: dict[str, float] = {}
    for item in raw or []:
        key, sep, value = item.partition("=")
        if not sep or not key.strip():
            raise ValueError(f"Malformed parameter '{item}'. Expected key=value.")
        parsed[key.strip()] = float(value)
    return parsed


def _freeze(name: str, raw_params: list[str] | None) -> Frozen:
    try:
        dist: Distribution = get_distribution(name)
        return dist(**_parse_params(raw_params))
    except (KeyError, TypeError, ValueError) as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc


def _format_metric(value: Any) -> str:
    if value is None:
        return "-"
    if isinstance(value, numbers.Integral):
        return str(int(value))
    if isinstance(value, numbers.Real):
        val = float(value)
        if math.isnan(val):
            return "nan"
        if math.isinf(val):
            return "inf" if val > 0 else "-inf"
        return f"{val:.6g}"
    return str(value)
