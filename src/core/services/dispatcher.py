"""Dispatch orchestration.

This module runs a parsed request against the CDN and EdgeOne clients. The
CLI delegates all control flow to `dispatch`, which keeps side effects
(printing, log groups, outputs) out of the core logic: progress is reported
through optional hooks and the outcome is returned as a `DispatchReport`.

Order matters and is part of the contract: the generic backend runs first
and any failure there stops the run before a zone is attempted; zones then
run one at a time in order of first appearance.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from core.domain.actions import ActionKind, Backend
from core.domain.errors import NoTargetsProvidedError, UnknownActionError
from core.domain.models import DispatchReport, OperationResult, ParsedRequest
from core.interfaces.cache_api import CacheApiClient
from core.services.action_router import route

USAGE_EXAMPLE = """\
paths: |
  https://www.example.com/index.html https://www.example.com/app.js
  zone-2o3h21ed8bpu https://edge.example.com/
  zone-2o3h21ed8bpu https://edge.example.com/assets/"""


@dataclass
class BackendClients:
    """Clients for each backend (either may be absent if never needed)."""

    generic: CacheApiClient | None = None
    zoned: CacheApiClient | None = None


@dataclass
class DispatchHooks:
    """Optional callbacks for UI layers (progress, warnings)."""

    warning: Callable[[str], None] | None = None
    operation_start: Callable[[Backend, str, str | None], None] | None = None
    operation_done: Callable[[OperationResult], None] | None = None


def ensure_targets(parsed: ParsedRequest) -> None:
    if parsed.is_empty():
        raise NoTargetsProvidedError(
            "No targets provided. Supply URLs or paths in the `paths` input, "
            "one group per line; prefix a line with a zone id to target EdgeOne.\n"
            f"Example:\n{USAGE_EXAMPLE}"
        )


def _require_client(client: CacheApiClient | None, backend: Backend) -> CacheApiClient:
    if client is None:
        raise ValueError(f"No client configured for the {backend.label()} backend")
    return client


async def _invoke(
    *,
    client: CacheApiClient,
    backend: Backend,
    operation: str,
    params: dict,
    zone_id: str | None,
    hooks: DispatchHooks,
) -> OperationResult:
    if hooks.operation_start:
        hooks.operation_start(backend, operation, zone_id)
    response = await client.call(operation, params)
    result = OperationResult.from_response(
        backend=backend,
        operation=operation,
        response=response,
        zone_id=zone_id,
    )
    if hooks.operation_done:
        hooks.operation_done(result)
    return result


async def dispatch(
    *,
    parsed: ParsedRequest,
    action: ActionKind | str,
    clients: BackendClients,
    hooks: DispatchHooks | None = None,
) -> DispatchReport:
    hooks = hooks or DispatchHooks()
    ensure_targets(parsed)

    report = DispatchReport()

    if parsed.generic_targets:
        spec = route(action, Backend.GENERIC)
        report.results.append(
            await _invoke(
                client=_require_client(clients.generic, Backend.GENERIC),
                backend=Backend.GENERIC,
                operation=spec.operation,
                params=spec.build_params(parsed.generic_targets),
                zone_id=None,
                hooks=hooks,
            )
        )

    for zone_id, group in parsed.zone_groups.items():
        try:
            spec = route(action, Backend.ZONED)
        except UnknownActionError as exc:
            report.skipped.append(zone_id)
            if hooks.warning:
                hooks.warning(f"{exc}; skipping zone {zone_id}")
            continue

        report.results.append(
            await _invoke(
                client=_require_client(clients.zoned, Backend.ZONED),
                backend=Backend.ZONED,
                operation=spec.operation,
                params=spec.build_params(group.targets, zone_id),
                zone_id=zone_id,
                hooks=hooks,
            )
        )

    return report
