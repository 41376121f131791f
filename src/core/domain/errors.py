"""Errors raised by the refresh pipeline.

Every error the user can trigger derives from `CdnRefreshError`, so the CLI
turns them into a single failure status with a readable message.
"""

from __future__ import annotations


class CdnRefreshError(Exception):
    """Base class for expected, user-facing failures."""


class MalformedInputError(CdnRefreshError):
    """The `paths` input could not be read (e.g. invalid JSON array)."""


class NoTargetsProvidedError(CdnRefreshError):
    """Neither generic targets nor zone groups were supplied."""


class UnknownActionError(CdnRefreshError):
    """The requested action has no operation for a backend."""

    def __init__(self, action: str, backend: str | None = None) -> None:
        self.action = action
        self.backend = backend
        where = f" for the {backend} backend" if backend else ""
        super().__init__(f"Unknown action type: {action}{where}")


class RemoteCallError(CdnRefreshError):
    """Transport or API-level failure reported by a cache API."""

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        request_id: str | None = None,
    ) -> None:
        self.code = code
        self.request_id = request_id
        text = f"[{code}] {message}" if code else message
        if request_id:
            text = f"{text} (RequestId: {request_id})"
        super().__init__(text)


class ConfigurationError(CdnRefreshError):
    """Required settings (credentials, endpoints) are missing or invalid."""
