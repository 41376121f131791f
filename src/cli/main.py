"""Command-line entry point (Typer).

`run` is the command a workflow step executes; it reads the action inputs
from the environment (see `core.config.AppSettings`), dispatches the
operations and publishes the `response` / `responses` outputs. `plan` and
`doctor` are local helpers that never call the purge APIs.
"""

from __future__ import annotations

import asyncio
import json
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.text import Text

from adapters.github_actions import GitHubActionsReporter
from adapters.json_exporter import dump_json, export_all_results, export_last_response
from adapters.tencent_cloud import build_cdn_client, build_teo_client
from cli import doctor
from cli.ui_components import (
    build_plan_table,
    build_summary_panel,
    build_targets_table,
    print_banner,
)
from core.config import AppSettings
from core.domain.actions import Backend
from core.domain.errors import CdnRefreshError, ConfigurationError, UnknownActionError
from core.domain.models import DispatchReport, OperationResult, ParsedRequest
from core.interfaces.reporter import Reporter
from core.services.action_router import route
from core.services.dispatcher import BackendClients, DispatchHooks, dispatch, ensure_targets
from core.services.target_parser import load_targets

app = typer.Typer(
    no_args_is_help=True,
    help="Purge or prefetch Tencent Cloud CDN / EdgeOne caches from CI.",
)
app.add_typer(doctor.app, name="doctor")

_console = Console(highlight=False, soft_wrap=True)


def _load_settings(action: str | None, paths: str | None) -> AppSettings:
    try:
        settings = AppSettings()
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors()
        )
        raise ConfigurationError(f"Invalid configuration: {problems}") from exc
    overrides: dict[str, str] = {}
    if action is not None:
        overrides["action"] = action
    if paths is not None:
        overrides["paths"] = paths
    return settings.model_copy(update=overrides) if overrides else settings


def _describe_targets(parsed: ParsedRequest) -> str:
    payload = {
        "generic": list(parsed.generic_targets),
        "zones": {zone_id: list(group.targets) for zone_id, group in parsed.zone_groups.items()},
    }
    return json.dumps(payload, ensure_ascii=False)


def _build_clients(settings: AppSettings, parsed: ParsedRequest) -> BackendClients:
    """Build a client only for the backends the action will actually call.

    Raises `UnknownActionError` for generic targets before credentials are
    looked at; zones with an unknown action are skipped later, so they need
    no client.
    """

    clients = BackendClients()
    if parsed.generic_targets:
        route(settings.action, Backend.GENERIC)
        clients.generic = build_cdn_client(settings)
    if parsed.zone_groups and _routes_to(settings.action, Backend.ZONED):
        clients.zoned = build_teo_client(settings)
    return clients


def _routes_to(action: str, backend: Backend) -> bool:
    try:
        route(action, backend)
    except UnknownActionError:
        return False
    return True


def _reporting_hooks(reporter: Reporter, completed: list[OperationResult]) -> DispatchHooks:
    def on_start(backend: Backend, operation: str, zone_id: str | None) -> None:
        scope = f" ({zone_id})" if zone_id else ""
        reporter.start_group(f"Executing {backend.label()} operation{scope}")
        reporter.info(f"Selected operation: {operation}")
        reporter.info(f"Calling Tencent Cloud {backend.label()} API...")

    def on_done(result: OperationResult) -> None:
        completed.append(result)
        reporter.info(f"{result.backend.label()} API call succeeded")
        reporter.end_group()

        reporter.start_group("API Response")
        reporter.info("Full response JSON:")
        reporter.info(dump_json(result.response))
        if result.task_id:
            reporter.info(f"TaskId: {result.task_id}")
        if result.job_id:
            reporter.info(f"JobId: {result.job_id}")
        if result.failed_list:
            reporter.warning(f"FailedList: {json.dumps(result.failed_list, ensure_ascii=False)}")
        if result.request_id:
            reporter.info(f"RequestId: {result.request_id}")
        reporter.end_group()

    return DispatchHooks(warning=reporter.warning, operation_start=on_start, operation_done=on_done)


def execute(settings: AppSettings, reporter: Reporter) -> DispatchReport:
    """Run one invocation end to end, publishing outputs through `reporter`.

    Every failure is reported through `set_failed` and then re-raised;
    outputs always carry the results that completed before it.
    """

    completed: list[OperationResult] = []
    report = DispatchReport()
    try:
        reporter.start_group("Initialization")
        reporter.info(f"Action type: {settings.action}")
        parsed = load_targets(settings.paths)
        reporter.info(f"Target paths: {_describe_targets(parsed)}")
        ensure_targets(parsed)
        clients = _build_clients(settings, parsed)
        reporter.end_group()

        report = asyncio.run(
            dispatch(
                parsed=parsed,
                action=settings.action,
                clients=clients,
                hooks=_reporting_hooks(reporter, completed),
            )
        )
        if not report.results:
            reporter.warning("No operation was executed.")
        return report
    except Exception as exc:
        reporter.end_group()
        reporter.error("Execution failed")
        reporter.set_failed(str(exc) if isinstance(exc, CdnRefreshError) else f"{type(exc).__name__}: {exc}")
        report = DispatchReport(results=completed)
        raise
    finally:
        reporter.set_output("response", export_last_response(report))
        reporter.set_output("responses", export_all_results(report))


@app.command(name="run")
def run_command(
    action: Optional[str] = typer.Option(None, "--action", help="Override the action input."),
    paths: Optional[str] = typer.Option(None, "--paths", help="Override the paths input."),
) -> None:
    """Dispatch the configured purge/prefetch operations (CI entry point)."""

    reporter = GitHubActionsReporter(_console)
    try:
        settings = _load_settings(action, paths)
    except ConfigurationError as exc:
        reporter.set_failed(str(exc))
        raise typer.Exit(code=1)

    try:
        report = execute(settings, reporter)
    except CdnRefreshError:
        raise typer.Exit(code=1)
    _console.print(build_summary_panel(report))


@app.command()
def plan(
    action: Optional[str] = typer.Option(None, "--action", help="Override the action input."),
    paths: Optional[str] = typer.Option(None, "--paths", help="Override the paths input."),
) -> None:
    """Show what `run` would call, without credentials or network access."""

    print_banner(_console)

    try:
        settings = _load_settings(action, paths)
        parsed = load_targets(settings.paths)
        ensure_targets(parsed)
    except CdnRefreshError as exc:
        _console.print(Text(str(exc), style="red"))
        raise typer.Exit(code=1)

    _console.print(build_targets_table(parsed))

    table = build_plan_table()
    if parsed.generic_targets:
        try:
            spec = route(settings.action, Backend.GENERIC)
        except UnknownActionError as exc:
            _console.print(Text(str(exc), style="red"))
            raise typer.Exit(code=1)
        params = spec.build_params(parsed.generic_targets)
        table.add_row(Backend.GENERIC.label(), "-", spec.operation, Text(dump_json(params, indent=None)))

    for zone_id, group in parsed.zone_groups.items():
        try:
            spec = route(settings.action, Backend.ZONED)
        except UnknownActionError:
            table.add_row(Backend.ZONED.label(), zone_id, "[yellow]skipped[/yellow]", "-")
            continue
        params = spec.build_params(group.targets, zone_id)
        table.add_row(Backend.ZONED.label(), zone_id, spec.operation, Text(dump_json(params, indent=None)))

    _console.print(table)


def run() -> None:
    app()


if __name__ == "__main__":
    run()
