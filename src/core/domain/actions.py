"""Actions and backends understood by the refresh task.

This module centralizes the enumerations shared by the router, the
dispatcher and the CLI. Keeping them in the domain layer lets every layer
use a single source of truth without importing adapters.
"""

from __future__ import annotations

from enum import Enum

from core.domain.errors import UnknownActionError


class ActionKind(str, Enum):
    """Cache operations a user can request through the `action` input."""

    PURGE_PATH = "purgePath"
    PURGE_URLS = "purgeUrls"
    PUSH_URLS = "pushUrls"

    @classmethod
    def parse(cls, value: "ActionKind | str") -> "ActionKind":
        """Convert an input value into an `ActionKind` or raise `UnknownActionError`."""

        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip())
        except ValueError:
            raise UnknownActionError(str(value)) from None

    def label(self) -> str:
        """Human readable label for log groups."""

        return {
            ActionKind.PURGE_PATH: "Directory refresh",
            ActionKind.PURGE_URLS: "URL refresh",
            ActionKind.PUSH_URLS: "URL prefetch",
        }[self]


class Backend(str, Enum):
    """Remote cache services a request can be routed to."""

    GENERIC = "generic"
    ZONED = "zoned"

    def label(self) -> str:
        return "CDN" if self is Backend.GENERIC else "EdgeOne"
