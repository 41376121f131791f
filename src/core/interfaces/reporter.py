"""Contract for CI log/output plumbing.

The CLI renders dispatch results through a `Reporter`, so the same flow can
print GitHub Actions workflow commands or plain text in a terminal.
"""

from __future__ import annotations

from typing import Protocol


class Reporter(Protocol):
    def start_group(self, title: str) -> None: ...

    def end_group(self) -> None: ...

    def info(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def set_output(self, name: str, value: str) -> None:
        """Publish a named output for later workflow steps."""

        ...

    def set_failed(self, message: str) -> None:
        """Mark the invocation as failed with a human-readable message."""

        ...
