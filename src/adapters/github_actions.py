"""GitHub Actions reporter (Rich).

Why separate:
- Keeps CI plumbing (log groups, outputs, failure status) out of the core.
- The same reporter degrades to styled terminal output when run locally.

On a runner (`GITHUB_ACTIONS=true`) messages become workflow commands
(`::group::`, `::warning::`, `::error::`) and outputs are appended to the
file named by `GITHUB_OUTPUT`.
"""

from __future__ import annotations

import os
import uuid
from pathlib import Path

from rich.console import Console
from rich.rule import Rule
from rich.text import Text


def _escape_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class GitHubActionsReporter:
    """`core.interfaces.reporter.Reporter` for GitHub Actions runners."""

    def __init__(
        self,
        console: Console | None = None,
        *,
        ci: bool | None = None,
        output_path: Path | None = None,
    ) -> None:
        self._console = console or Console(highlight=False, soft_wrap=True)
        self._ci = os.environ.get("GITHUB_ACTIONS") == "true" if ci is None else ci
        if output_path is None:
            env_output = os.environ.get("GITHUB_OUTPUT")
            output_path = Path(env_output) if env_output else None
        self._output_path = output_path
        self.outputs: dict[str, str] = {}
        self.failed: str | None = None
        self._group_open = False

    def _command(self, name: str, message: str) -> None:
        self._console.print(f"::{name}::{_escape_data(message)}", markup=False, highlight=False)

    def start_group(self, title: str) -> None:
        # Runners do not nest groups.
        self.end_group()
        self._group_open = True
        if self._ci:
            self._command("group", title)
        else:
            self._console.print(Rule(Text(title, style="bold cyan"), align="left", style="cyan"))

    def end_group(self) -> None:
        if not self._group_open:
            return
        self._group_open = False
        if self._ci:
            self._console.print("::endgroup::", markup=False, highlight=False)
        else:
            self._console.print()

    def info(self, message: str) -> None:
        self._console.print(message, markup=False, highlight=False)

    def warning(self, message: str) -> None:
        if self._ci:
            self._command("warning", message)
        else:
            self._console.print(Text(f"Warning: {message}", style="yellow"))

    def error(self, message: str) -> None:
        if self._ci:
            self._command("error", message)
        else:
            self._console.print(Text(f"Error: {message}", style="bold red"))

    def set_output(self, name: str, value: str) -> None:
        self.outputs[name] = value
        if self._output_path is None:
            if not self._ci:
                self._console.print(Text.assemble((f"Output {name}: ", "dim"), value))
            return

        delimiter = f"ghadelimiter_{uuid.uuid4()}"
        with open(self._output_path, "a", encoding="utf-8") as fh:
            fh.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")

    def set_failed(self, message: str) -> None:
        self.failed = message
        self.error(message)
