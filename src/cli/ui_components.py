"""CLI UI components (Rich).

Why separate components:
- Avoids mixing command logic with visual details.
- Lets `plan` and `doctor` reuse the same tables.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import DispatchReport, ParsedRequest


def print_banner(console: Console) -> None:
    """Print the welcome banner (interactive commands only, never in `run`)."""

    title = Text("cdn-refresh", style="bold cyan")
    subtitle = Text("CDN • EdgeOne • purge & prefetch", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_targets_table(parsed: ParsedRequest) -> Table:
    """One row per scope: the generic scope first, then each zone."""

    table = Table(title="Targets")
    table.add_column("Scope", style="cyan", no_wrap=True)
    table.add_column("Count", style="green", justify="right")
    table.add_column("Targets", style="white")
    if parsed.generic_targets:
        table.add_row("generic", str(len(parsed.generic_targets)), Text("\n".join(parsed.generic_targets)))
    for group in parsed.zone_groups.values():
        table.add_row(group.zone_id, str(len(group.targets)), Text("\n".join(group.targets)))
    return table


def build_plan_table() -> Table:
    table = Table(title="Planned operations")
    table.add_column("Backend", style="cyan", no_wrap=True)
    table.add_column("Zone", style="white", no_wrap=True)
    table.add_column("Operation", style="magenta", no_wrap=True)
    table.add_column("Params", style="dim")
    return table


def build_summary_panel(report: DispatchReport) -> Panel:
    """Panel listing the identifiers returned by each call."""

    body = Text()
    for result in report.results:
        scope = result.zone_id or result.backend.label()
        body.append(f"{scope}: ", style="bold")
        body.append(result.operation)
        for key, value in (
            ("TaskId", result.task_id),
            ("JobId", result.job_id),
            ("RequestId", result.request_id),
        ):
            if value:
                body.append(f"  {key}={value}", style="dim")
        body.append("\n")
    for zone_id in report.skipped:
        body.append(f"{zone_id}: skipped\n", style="yellow")
    if not report.results and not report.skipped:
        body.append("No operations executed.", style="dim")
    return Panel(body, title=Text("Summary", style="bold green"), border_style="green")
