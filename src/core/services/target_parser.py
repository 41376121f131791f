"""Target-list parsing.

Turns the free-text `paths` input into a `ParsedRequest`:

    https://a.com/ https://b.com/
    zone-2o3h21ed8bpu https://a.com/ https://c.com/

A line whose first token is a zone identifier feeds that zone; any other
line feeds the generic (CDN) scope. Parsing never fails on odd lines: blank
lines and stray whitespace are skipped.
"""

from __future__ import annotations

import json
import re
from typing import Iterable

from core.domain.errors import MalformedInputError
from core.domain.models import ParsedRequest, ZoneGroup

ZONE_ID_RE = re.compile(r"^zone-[A-Za-z0-9]+$")


def is_zone_id(token: str) -> bool:
    return bool(ZONE_ID_RE.match(token))


def _dedupe(values: Iterable[str]) -> tuple[str, ...]:
    """Remove duplicated values keeping the first occurrence."""

    return tuple(dict.fromkeys(values))


def parse_lines(lines: Iterable[str]) -> ParsedRequest:
    generic: list[str] = []
    zones: dict[str, list[str]] = {}

    for raw_line in lines:
        tokens = raw_line.split()
        if not tokens:
            continue
        head, rest = tokens[0], tokens[1:]
        if is_zone_id(head):
            if rest:
                zones.setdefault(head, []).extend(rest)
            continue
        generic.extend(tokens)

    return ParsedRequest(
        generic_targets=_dedupe(generic),
        zone_groups={
            zone_id: ZoneGroup(zone_id=zone_id, targets=_dedupe(targets))
            for zone_id, targets in zones.items()
        },
    )


def parse_targets(text: str | None) -> ParsedRequest:
    """Parse the multi-line target grammar.

    Both scopes keep first-seen order after de-duplication, so logs are
    reproducible between runs. `None` and empty input give an empty request;
    the caller decides whether that is fatal.
    """

    if not text:
        return ParsedRequest()
    return parse_lines(text.splitlines())


def load_targets(raw: str | None) -> ParsedRequest:
    """Read the `paths` input in either of its accepted shapes.

    - Text grammar (see `parse_targets`).
    - JSON array of strings, e.g. `["https://a.com/", "zone-x https://b.com/"]`;
      every element is read as one line of the grammar.
    """

    if raw is None:
        return ParsedRequest()

    stripped = raw.strip()
    if not stripped.startswith("["):
        return parse_targets(raw)

    try:
        data = json.loads(stripped)
    except json.JSONDecodeError as exc:
        raise MalformedInputError(f"Invalid JSON in paths input: {exc}") from exc

    if not isinstance(data, list) or not all(isinstance(item, str) for item in data):
        raise MalformedInputError("The paths JSON input must be an array of strings.")

    return parse_lines(data)


def format_targets(parsed: ParsedRequest) -> str:
    """Serialize a `ParsedRequest` back into the text grammar."""

    lines: list[str] = []
    if parsed.generic_targets:
        lines.append(" ".join(parsed.generic_targets))
    for group in parsed.zone_groups.values():
        lines.append(" ".join((group.zone_id, *group.targets)))
    return "\n".join(lines)
