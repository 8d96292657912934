"""CLI commands for Discord Purger."""

import asyncio
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from ..config import Settings, settings, validate_settings
from ..exceptions import PurgeError
from ..models.search_result import RunSummary, TargetReport
from ..models.target import Target
from ..purger.client import DiscordClient
from ..purger.delete_drainer import DeleteDrainer
from ..purger.identity import resolve_identity
from ..purger.runner import PurgeRunner
from ..purger.search_paginator import SearchPaginator
from ..utils.logging import setup_logging
from ..utils.pacing import Pacer

app = typer.Typer(
    name="discord-purger",
    help="Delete every message your Discord account has sent",
    add_completion=False,
)
console = Console()


def _build_runner(
    config: Settings,
    token: str,
    exclude: list[str],
    prioritize: list[str],
) -> tuple[DiscordClient, PurgeRunner]:
    """Wire the client and components from settings."""
    client = DiscordClient(
        token=token,
        base_url=config.api_base_url,
        timeout=config.request_timeout,
    )
    pacer = Pacer()
    paginator = SearchPaginator(
        client,
        pacer=pacer,
        search_cap=config.search_cap,
        retry_after_multiplier_ms=config.retry_after_multiplier_ms,
        transport_retry_limit=config.transport_retry_limit,
    )
    drainer = DeleteDrainer(client, pacer=pacer, delay_ms=config.delete_delay_ms)
    runner = PurgeRunner(
        client,
        paginator=paginator,
        drainer=drainer,
        pacer=pacer,
        exclude_ids=config.exclude_ids + exclude,
        prioritized_ids=config.prioritized_ids + prioritize,
        target_delay_ms=config.target_delay_ms,
    )
    return client, runner


def _run(coro) -> None:
    """Run a command coroutine, mapping fatal errors to exit codes."""
    try:
        asyncio.run(coro)
    except PurgeError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted.[/yellow] Progress is not saved.")
        raise typer.Exit(code=130)


@app.command()
def purge(
    exclude: Annotated[
        Optional[list[str]],
        typer.Option("--exclude", "-x", help="Target id to skip (repeatable)"),
    ] = None,
    prioritize: Annotated[
        Optional[list[str]],
        typer.Option("--prioritize", "-p", help="Target id to process first (repeatable)"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose logging"),
    ] = False,
    json_logs: Annotated[
        bool,
        typer.Option("--json-logs", help="Emit logs as JSON"),
    ] = False,
) -> None:
    """Search every guild and DM for your messages and delete them."""
    log_level = "DEBUG" if verbose else settings.log_level
    setup_logging(log_level, json_output=json_logs)

    try:
        token = validate_settings(settings)
    except PurgeError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1)

    client, runner = _build_runner(settings, token, exclude or [], prioritize or [])
    _run(_purge_async(client, runner))


async def _purge_async(client: DiscordClient, runner: PurgeRunner) -> None:
    """Async implementation of purge command."""
    console.print("\n[bold blue]Discord Purger[/bold blue]")
    console.print(f"Search cap: {runner.paginator.search_cap} messages per target")
    console.print(f"Delete delay: {runner.drainer.delay_ms} ms")
    console.print()

    async with client:
        summary = await runner.run(on_target_done=_print_target_report)

    _print_summary(summary)


def _print_target_report(report: TargetReport) -> None:
    table = Table(
        title=f"{report.target.kind.value}: {report.target.name}",
        show_header=True,
    )
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Target ID", report.target.id)
    table.add_row("Total Results", str(report.search.total_results))
    table.add_row("Gathered", str(len(report.search.messages)))
    table.add_row("Stop Reason", report.search.stop_reason.value)
    table.add_row("Deleted", str(report.drain.deleted))
    table.add_row("Failed", str(report.drain.failed))
    console.print(table)
    console.print()


def _print_summary(summary: RunSummary) -> None:
    console.print("[bold green]Complete![/bold green]")
    console.print(f"Account: {summary.account.username}")
    console.print(f"Started: {summary.started_at:%Y-%m-%d %H:%M:%S} UTC")
    console.print(
        f"Targets: {summary.targets} ( Guilds: {summary.guilds} | DMs: {summary.dms} )"
    )
    console.print(f"Messages found: {summary.messages_found}")
    console.print(f"Messages deleted: {summary.messages_deleted}")
    if summary.messages_failed:
        console.print(f"[yellow]Messages failed: {summary.messages_failed}[/yellow]")
    console.print(
        f"Duration: {summary.duration_seconds:.2f}s (waiting: {summary.waited_seconds:.2f}s)"
    )


@app.command()
def targets(
    exclude: Annotated[
        Optional[list[str]],
        typer.Option("--exclude", "-x", help="Target id to skip (repeatable)"),
    ] = None,
    prioritize: Annotated[
        Optional[list[str]],
        typer.Option("--prioritize", "-p", help="Target id to process first (repeatable)"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose logging"),
    ] = False,
) -> None:
    """List targets in processing order without deleting anything."""
    log_level = "DEBUG" if verbose else settings.log_level
    setup_logging(log_level)

    try:
        token = validate_settings(settings)
    except PurgeError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1)

    client, runner = _build_runner(settings, token, exclude or [], prioritize or [])
    _run(_targets_async(client, runner))


async def _targets_async(client: DiscordClient, runner: PurgeRunner) -> None:
    """Async implementation of targets command."""
    async with client:
        account = await resolve_identity(client)
        ordered = await runner.collect_targets()

    console.print(f"Logged in as [bold]{account.username}[/bold]")
    _print_targets(ordered)


def _print_targets(ordered: list[Target]) -> None:
    table = Table(title=f"Targets ({len(ordered)})", show_header=True)
    table.add_column("#", style="dim")
    table.add_column("Kind", style="cyan")
    table.add_column("Name", style="bold")
    table.add_column("ID", style="green")
    for index, target in enumerate(ordered, start=1):
        table.add_row(str(index), target.kind.value, target.name, target.id)
    console.print(table)


@app.command()
def version() -> None:
    """Show version information."""
    from .. import __version__

    console.print(f"Discord Purger v{__version__}")


def main() -> None:
    """Main entry point for CLI."""
    app()


if __name__ == "__main__":
    main()
