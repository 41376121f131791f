"""Mapping of (action, backend) to the remote operation and its parameters.

One table replaces per-backend if/else chains: an action missing from the
table is a single, well-defined outcome (`UnknownActionError`).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Sequence

from core.domain.actions import ActionKind, Backend
from core.domain.errors import UnknownActionError

ParamsBuilder = Callable[[Sequence[str], str | None], dict[str, Any]]


@dataclass(frozen=True)
class OperationSpec:
    """Remote operation name plus the builder for its request body."""

    operation: str
    builder: ParamsBuilder

    def build_params(self, targets: Sequence[str], zone_id: str | None = None) -> dict[str, Any]:
        return self.builder(list(targets), zone_id)


def _require_zone(zone_id: str | None) -> str:
    if not zone_id:
        raise ValueError("zone_id is required for zoned operations")
    return zone_id


def _zone_purge(purge_type: str) -> ParamsBuilder:
    def build(targets: Sequence[str], zone_id: str | None) -> dict[str, Any]:
        return {"ZoneId": _require_zone(zone_id), "Type": purge_type, "Targets": list(targets)}

    return build


def _zone_prefetch(targets: Sequence[str], zone_id: str | None) -> dict[str, Any]:
    return {"ZoneId": _require_zone(zone_id), "Targets": list(targets)}


_ROUTES: dict[tuple[ActionKind, Backend], OperationSpec] = {
    (ActionKind.PURGE_PATH, Backend.GENERIC): OperationSpec(
        "PurgePathCache",
        lambda targets, _zone: {"Paths": list(targets), "FlushType": "flush"},
    ),
    (ActionKind.PURGE_URLS, Backend.GENERIC): OperationSpec(
        "PurgeUrlsCache",
        lambda targets, _zone: {"Urls": list(targets)},
    ),
    (ActionKind.PUSH_URLS, Backend.GENERIC): OperationSpec(
        "PushUrlsCache",
        lambda targets, _zone: {"Urls": list(targets)},
    ),
    (ActionKind.PURGE_PATH, Backend.ZONED): OperationSpec("CreatePurgeTask", _zone_purge("purge_prefix")),
    (ActionKind.PURGE_URLS, Backend.ZONED): OperationSpec("CreatePurgeTask", _zone_purge("purge_url")),
    (ActionKind.PUSH_URLS, Backend.ZONED): OperationSpec("CreatePrefetchTask", _zone_prefetch),
}


def route(action: ActionKind | str, backend: Backend) -> OperationSpec:
    """Resolve the operation for `action` on `backend`.

    Raises `UnknownActionError` when the pair is not in the routing table.
    """

    try:
        kind = ActionKind.parse(action)
    except UnknownActionError:
        raise UnknownActionError(str(action), backend.label()) from None

    spec = _ROUTES.get((kind, backend))
    if spec is None:
        raise UnknownActionError(kind.value, backend.label())
    return spec


def supported_actions(backend: Backend) -> list[ActionKind]:
    return [kind for (kind, b) in _ROUTES if b is backend]
