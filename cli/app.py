"""Typer entry point for running the cold-chain edge agent."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

import typer

from cli.client import UploadClient
from logging_config import configure_logging
from services.agent import EdgeAgent, StartupTimeoutError
from services.tokens import issue_token
from settings import Settings, get_settings, normalize_log_level


@dataclass
class CLIState:
    settings: Settings
    client: UploadClient


app = typer.Typer(
    help="Cold-chain edge agent: simulate trailer sensors and upload the aggregate.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=1)
    return state


@app.callback()
def main(
    ctx: typer.Context,
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        "-b",
        help="Remote store base URL (defaults to POSTGREST_BASE_URL env).",
    ),
    sensor_count: Optional[int] = typer.Option(
        None,
        "--sensor-count",
        min=1,
        help="Number of simulated sensors (defaults to SENSOR_COUNT env or 30).",
    ),
    insecure: bool = typer.Option(
        False,
        "--insecure",
        help="Skip TLS certificate verification (closed test networks only).",
    ),
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Logging level (defaults to LOG_LEVEL env or INFO).",
    ),
) -> None:
    """Entry point for the CLI."""
    settings = get_settings()
    overrides: dict[str, object] = {}
    if base_url:
        overrides["base_url"] = base_url.rstrip("/")
    if sensor_count is not None:
        overrides["sensor_count"] = sensor_count
    if insecure:
        overrides["verify_tls"] = False
    if overrides:
        settings = replace(settings, **overrides)

    configure_logging(normalize_log_level(log_level, settings.log_level))
    client = UploadClient(settings)
    ctx.obj = CLIState(settings=settings, client=client)
    ctx.call_on_close(client.close)


@app.command("run")
def run_command(
    ctx: typer.Context,
    ticks: int = typer.Option(
        0,
        "--ticks",
        min=0,
        help="Stop after this many uploads (0 runs forever).",
    ),
) -> None:
    """Wait for the store to come up, then upload once per interval."""
    state = _get_state(ctx)
    agent = EdgeAgent(state.settings, state.client)
    try:
        agent.run(max_ticks=ticks or None)
    except StartupTimeoutError as exc:
        typer.secho(f"FATAL: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc


@app.command("send-once")
def send_once_command(ctx: typer.Context) -> None:
    """Run a single simulate, aggregate and upload tick."""
    state = _get_state(ctx)
    result = EdgeAgent(state.settings, state.client).send_once()
    typer.echo(f"outcome: {result.outcome.value}")
    if not result.succeeded:
        raise typer.Exit(code=1)


@app.command("probe")
def probe_command(ctx: typer.Context) -> None:
    """Check once whether the remote store is reachable."""
    state = _get_state(ctx)
    if not state.client.probe():
        typer.secho(f"{state.settings.base_url} is unreachable.", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    typer.secho(f"{state.settings.base_url} is reachable.", fg=typer.colors.GREEN)


@app.command("token")
def token_command(ctx: typer.Context) -> None:
    """Print a freshly signed bearer token."""
    state = _get_state(ctx)
    typer.echo(issue_token(state.settings.jwt_secret))
