"""Contract for remote cache-management APIs.

Why Protocol:
- Defines a structural contract (duck typing) without rigid inheritance.
- The dispatcher can run against the signed Tencent Cloud client in
  production and against in-memory fakes in tests.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class CacheApiClient(Protocol):
    """Minimal contract for a cache API (CDN or EdgeOne).

    Design rules:
    - `call` is asynchronous because it performs network I/O.
    - Returns the response object (without the `Response` envelope).
    - Raises `RemoteCallError` for transport and API-level failures.
    """

    async def call(self, operation: str, params: dict[str, Any]) -> dict[str, Any]:
        """Invoke `operation` with `params` and return the response object."""

        ...
