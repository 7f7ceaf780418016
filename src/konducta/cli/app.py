"""
Root Typer application for the konducta CLI.

``konducta run`` resolves settings and flags into run options, builds the run
context and hands it to the bot. Unknown flags do not stop parsing: they are
collected as invalid options so the bot can refuse them, or warn about them
under ``--force``.
"""

from __future__ import annotations

from typing import NoReturn

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table
from typer import Typer

from konducta.core.errors import ConfigError, InvalidConfigError
from konducta.core.settings import KonductaSettings, get_settings
from konducta.options import Stage

app = Typer(
    name="konducta",
    help="konducta: run the advisory pipeline across sources and vendors.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()
err_console = Console(stderr=True)


def _fail(error: ConfigError) -> NoReturn:
    """Print a configuration error and exit 1."""
    err_console.print(f"[bold red]Error[/bold red] ({error.category.value}): {error.message}")
    raise typer.Exit(code=1) from error


def _settings_error(error: ValidationError) -> InvalidConfigError:
    """Turn the first settings validation failure into a config error."""
    first = error.errors()[0]
    key = ".".join(str(part) for part in first["loc"]) or "settings"
    return InvalidConfigError(key, first.get("input"), f"{key}: {first['msg']}")


def _load_settings() -> KonductaSettings:
    """Load settings, exiting 1 with a readable message when they are invalid."""
    try:
        return get_settings()
    except ValidationError as e:
        _fail(_settings_error(e))


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        from importlib.metadata import PackageNotFoundError
        from importlib.metadata import version as pkg_version

        try:
            v = pkg_version("konducta")
        except PackageNotFoundError:
            v = "0.1.0"
        typer.echo(f"konducta {v}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """konducta CLI: orchestrate advisory runs."""


# ── Commands ─────────────────────────────────────────────────────────────


@app.command(
    "run",
    context_settings={"allow_extra_args": True, "ignore_unknown_options": True},
)
def run(
    ctx: typer.Context,
    force: bool = typer.Option(False, "--force", help="Continue despite invalid options."),
    safe: bool = typer.Option(False, "--safe", help="Do not reset git projects."),
    keep: bool = typer.Option(False, "--keep", help="Keep the data directory after upload."),
    stage: list[str] | None = typer.Option(
        None, "--stage", "-s", help="Run only these stages (repeatable)."
    ),
    skip: list[str] | None = typer.Option(None, "--skip", help="Skip these stages (repeatable)."),
    product: list[str] | None = typer.Option(
        None, "--product", "-p", help="Vendor products as vendor=app1,app2 (repeatable)."
    ),
    log_level: str | None = typer.Option(None, "--log-level", help="DEBUG, INFO, WARNING, ERROR or CRITICAL."),
    log_format: str | None = typer.Option(None, "--log-format", help="console or json."),
) -> None:
    """Run every enabled stage for every configured company."""
    from konducta.bot import Bot, install_signal_handlers
    from konducta.context import RunContext
    from konducta.framework.logging import configure_logging
    from konducta.options import RunOptions

    settings = _load_settings()
    try:
        configure_logging(
            level=(log_level or settings.log_level).upper(),
            format=(log_format or settings.log_format).lower(),
        )
    except ConfigError as e:
        _fail(e)

    options = RunOptions.from_cli(
        settings,
        force=force,
        safe=safe,
        keep=keep,
        only=stage,
        skip=skip,
        products=product,
        extra=list(ctx.args),
    )

    try:
        bot = Bot(RunContext.create(options, settings))
    except ConfigError as e:
        _fail(e)

    install_signal_handlers(bot)
    bot.run()


@app.command("companies")
def companies() -> None:
    """List registered sources and vendors with the stages they implement."""
    from konducta.companies.registry import get_source, get_vendor, list_sources, list_vendors

    table = Table(title="Companies")
    table.add_column("Kind", style="cyan")
    table.add_column("Name", style="bold")
    table.add_column("Class")
    table.add_column("Stages")

    rows = [("source", name, get_source(name)) for name in list_sources()]
    rows += [("vendor", name, get_vendor(name)) for name in list_vendors()]
    for kind, name, cls in rows:
        stages = ", ".join(s.value for s in Stage if cls.supports(s)) or "-"
        table.add_row(kind, name, cls.__name__, stages)

    if not rows:
        console.print("[dim]No companies registered.[/dim]")
        return
    console.print(table)


@app.command("stages")
def stages() -> None:
    """Show the default enabled state of each stage."""
    for name, enabled in _load_settings().stages.to_dict().items():
        mark = "[green]on[/green]" if enabled else "[red]off[/red]"
        console.print(f"{name:<10} {mark}")
