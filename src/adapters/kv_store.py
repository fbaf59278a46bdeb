"""Store de listas sobre la API REST de Redis (Upstash / Vercel KV).

Protocolo:
- `POST <url>` con el comando como array JSON: `["GET", key]`, `["SET", key, value]`.
- Respuesta `{"result": ...}` o `{"error": "..."}`.
- El valor se guarda serializado como JSON (igual que el SDK de Vercel KV), así
  que `GET` devuelve un string que hay que decodificar.

Notas:
- 200 + `result: null` => la clave no existe.
- Cualquier otro fallo se reporta como `StoreError`.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Sequence

import httpx

from adapters.http_client import build_async_client
from core.config import StoreConfig
from core.interfaces.list_store import ListStore, StoreError

logger = logging.getLogger(__name__)


def _decode_list(raw: Any, *, key: str) -> list[str] | None:
    if raw is None:
        return None
    value = raw
    if isinstance(raw, str):
        try:
            value = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise StoreError(f"Value under '{key}' is not valid JSON") from exc
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise StoreError(f"Value under '{key}' is not a list of strings")
    return value


class KvRestListStore(ListStore):
    """Implementación de `ListStore` contra un endpoint REST compatible con Upstash."""

    def __init__(
        self,
        config: StoreConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        self._transport = transport

    async def _command(self, *args: str) -> Any:
        try:
            async with build_async_client(self._config, transport=self._transport) as client:
                response = await client.post("", json=list(args))
        except httpx.HTTPError as exc:
            raise StoreError(str(exc) or exc.__class__.__name__) from exc

        try:
            payload = response.json()
        except ValueError:
            payload = None

        if isinstance(payload, dict) and payload.get("error"):
            raise StoreError(str(payload["error"]))
        if response.status_code >= 400:
            raise StoreError(f"Store request failed with HTTP {response.status_code}")
        if not isinstance(payload, dict) or "result" not in payload:
            raise StoreError("Unexpected response from store")
        return payload["result"]

    async def get(self, key: str) -> list[str] | None:
        result = await self._command("GET", key)
        return _decode_list(result, key=key)

    async def set(self, key: str, values: Sequence[str]) -> None:
        result = await self._command("SET", key, json.dumps(list(values)))
        if result != "OK":
            raise StoreError(f"Unexpected SET result: {result!r}")
        logger.debug("Wrote %d entries under %s", len(values), key)
