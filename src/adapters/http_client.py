"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts, headers y auth contra el store REST.
- Facilita testeo: se puede inyectar un `httpx.MockTransport`.
"""

from __future__ import annotations

import httpx

from core.config import StoreConfig


def build_async_client(
    config: StoreConfig,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` apuntando al endpoint del store.

    Por qué un builder:
    - Todas las llamadas comparten timeout, User-Agent y bearer token.
    - El timeout es explícito: sin él, una llamada colgada bloquearía `subscribe`.
    """

    headers: dict[str, str] = {
        "User-Agent": config.user_agent,
        "Accept": "application/json",
        "Authorization": f"Bearer {config.token}",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        base_url=config.url,
        timeout=httpx.Timeout(config.timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )
