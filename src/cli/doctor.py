"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_async_client
from core.config import AppSettings
from core.domain.actions import ActionKind, Backend
from core.domain.errors import CdnRefreshError
from core.services.action_router import supported_actions
from core.services.target_parser import load_targets

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_endpoint(settings: AppSettings, host: str) -> tuple[bool, str]:
    """Any HTTP answer counts as reachable; the API rejects unsigned requests."""

    try:
        async with build_async_client(settings) as client:
            response = await client.get(f"https://{host}/")
        return True, f"HTTP {response.status_code}"
    except Exception as exc:
        return False, str(exc)


def collect_checks(settings: AppSettings, *, network: bool = True) -> list[tuple[str, str, str]]:
    """Return `(check, status, details)` rows."""

    rows: list[tuple[str, str, str]] = []

    if settings.has_credentials():
        rows.append(("Credentials", "OK", "secret_id and secret_key are set"))
    else:
        rows.append(("Credentials", "FAIL", "Set INPUT_SECRET_ID and INPUT_SECRET_KEY"))

    try:
        kind = ActionKind.parse(settings.action)
        rows.append(("Action", "OK", f"{kind.value} ({kind.label()})"))
    except CdnRefreshError as exc:
        accepted = ", ".join(kind.value for kind in supported_actions(Backend.GENERIC))
        rows.append(("Action", "FAIL", f"{exc} (supported: {accepted})"))

    try:
        parsed = load_targets(settings.paths)
        if parsed.is_empty():
            rows.append(("Targets", "FAIL", "No targets in INPUT_PATHS"))
        else:
            rows.append(
                (
                    "Targets",
                    "OK",
                    f"{parsed.target_count()} target(s): "
                    f"{len(parsed.generic_targets)} generic, {len(parsed.zone_groups)} zone(s)",
                )
            )
    except CdnRefreshError as exc:
        rows.append(("Targets", "FAIL", str(exc)))

    if network:
        for label, host in (("CDN endpoint", settings.cdn_endpoint), ("EdgeOne endpoint", settings.teo_endpoint)):
            ok, detail = asyncio.run(_check_endpoint(settings, host))
            rows.append((label, "OK" if ok else "FAIL", f"{host}: {detail}"))

    return rows


@app.command()
def run(
    offline: bool = typer.Option(False, "--offline", help="Skip endpoint connectivity checks."),
) -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="cdn-refresh Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    rows = collect_checks(settings, network=not offline)
    for check, status, details in rows:
        table.add_row(check, status, details)

    _console.print(table)

    if any(status == "FAIL" for _, status, _ in rows):
        raise typer.Exit(code=1)
