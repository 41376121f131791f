"""Domain models (Pydantic v2).

Why Pydantic in the domain:
- Strict validation and self-documenting fields (Field) without coupling the
  Core to I/O libraries.
- Makes serializing results for the CI output channel trivial.

Note:
- These models describe *what* is purged or prefetched, not *how* the remote
  APIs are reached.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, Field, field_serializer, field_validator
from pydantic.config import ConfigDict

from core.domain.actions import Backend


class ZoneGroup(BaseModel):
    """Targets bound to a single EdgeOne zone.

    Invariant: `targets` is never empty and holds each target once, in the
    order it was first seen.
    """

    model_config = ConfigDict(frozen=True)

    zone_id: str = Field(
        ...,
        min_length=1,
        description="Zone identifier (e.g. 'zone-2o3h21ed8bpu').",
    )
    targets: tuple[str, ...] = Field(
        ...,
        min_length=1,
        description="URLs or path prefixes to purge/prefetch inside the zone.",
    )


class ParsedRequest(BaseModel):
    """Normalized target set produced once per invocation.

    Why frozen:
    - The dispatcher and every renderer read the same instance; nobody is
      allowed to mutate it after parsing.
    """

    model_config = ConfigDict(frozen=True)

    generic_targets: tuple[str, ...] = Field(
        default_factory=tuple,
        description="Targets for the non-zoned CDN API (deduplicated).",
    )
    zone_groups: Mapping[str, ZoneGroup] = Field(
        default_factory=dict,
        validate_default=True,
        description="Zone id -> group, in order of first appearance (read-only).",
    )

    @field_validator("zone_groups", mode="after")
    @classmethod
    def _freeze_zone_groups(cls, value: Mapping[str, ZoneGroup]) -> Mapping[str, ZoneGroup]:
        return MappingProxyType(dict(value))

    @field_serializer("zone_groups")
    def _serialize_zone_groups(self, value: Mapping[str, ZoneGroup]) -> dict[str, ZoneGroup]:
        return dict(value)

    def is_empty(self) -> bool:
        return not self.generic_targets and not self.zone_groups

    def target_count(self) -> int:
        return len(self.generic_targets) + sum(len(g.targets) for g in self.zone_groups.values())


class OperationResult(BaseModel):
    """Outcome of one successful remote call."""

    backend: Backend = Field(..., description="Backend that served the call.")
    operation: str = Field(..., min_length=1, description="Remote API action name.")
    zone_id: str | None = Field(
        default=None,
        description="Zone the call targeted (zoned backend only).",
    )
    response: dict[str, Any] = Field(
        default_factory=dict,
        description="Raw response object returned by the API.",
    )
    task_id: str | None = Field(default=None, description="CDN `TaskId`, if any.")
    job_id: str | None = Field(default=None, description="EdgeOne `JobId`, if any.")
    request_id: str | None = Field(default=None, description="`RequestId` of the call.")
    failed_list: list[Any] | None = Field(
        default=None,
        description="EdgeOne `FailedList` (targets the service rejected).",
    )

    @classmethod
    def from_response(
        cls,
        *,
        backend: Backend,
        operation: str,
        response: dict[str, Any],
        zone_id: str | None = None,
    ) -> "OperationResult":
        """Build a result extracting the well-known identifiers from `response`."""

        def _text(key: str) -> str | None:
            value = response.get(key)
            if value is None or value == "":
                return None
            return str(value)

        failed = response.get("FailedList")
        return cls(
            backend=backend,
            operation=operation,
            zone_id=zone_id,
            response=response,
            task_id=_text("TaskId"),
            job_id=_text("JobId"),
            request_id=_text("RequestId"),
            failed_list=failed if isinstance(failed, list) else None,
        )


class DispatchReport(BaseModel):
    """Everything a dispatch produced, in execution order."""

    results: list[OperationResult] = Field(default_factory=list)
    skipped: list[str] = Field(
        default_factory=list,
        description="Zone ids skipped because the action has no zoned operation.",
    )

    @property
    def last_response(self) -> dict[str, Any] | None:
        if not self.results:
            return None
        return self.results[-1].response
