"""httpx wrapper.

Why a wrapper:
- Standardizes timeouts, headers and base URL for every resource call.
- Eases testing: a client built on `httpx.MockTransport` can be injected.
"""

from __future__ import annotations

import httpx

from core.config import AppSettings


def build_async_client(
    settings: AppSettings | None = None,
    *,
    base_url: str | None = None,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create an `httpx.AsyncClient` with the application defaults.

    Why a builder:
    - Centralizes timeouts/headers so every adapter behaves the same.
    - `transport` lets tests swap the network for `httpx.MockTransport`.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        base_url=(base_url or settings.api_base_url).rstrip("/") + "/",
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )
