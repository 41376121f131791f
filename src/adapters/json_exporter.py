"""JSON rendering of API responses.

Why JSON:
- The `response` output is consumed by later workflow steps (`fromJSON`).
- A stable format (sorted keys) keeps logs diffable between runs.
"""

from __future__ import annotations

import json
from typing import Any

from core.domain.models import DispatchReport


def dump_json(payload: Any, *, indent: int | None = 2) -> str:
    """Serialize `payload` as UTF-8 friendly JSON with a stable key order."""

    return json.dumps(payload, ensure_ascii=False, indent=indent, sort_keys=True)


def export_last_response(report: DispatchReport) -> str:
    """Last raw response object, or an empty object when nothing ran."""

    return dump_json(report.last_response or {}, indent=None)


def export_all_results(report: DispatchReport) -> str:
    """Every `OperationResult` of the run, in execution order."""

    payload = [result.model_dump(mode="json") for result in report.results]
    return dump_json(payload, indent=None)
