"""Contrato del store de listas.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- Permite que adaptadores (REST tipo Upstash/Vercel KV, memoria) sean
  intercambiables y testeables sin acoplar el Core a implementaciones concretas.
"""

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable


class StoreError(RuntimeError):
    """Fallo del store (red, protocolo o datos con formato inesperado)."""


@runtime_checkable
class ListStore(Protocol):
    """Contrato mínimo: leer y escribir una lista de strings bajo una clave.

    Reglas de diseño:
    - Ambos métodos son asíncronos porque típicamente harán I/O (HTTP).
    - `get` devuelve `None` si la clave no existe.
    - Los fallos se reportan como `StoreError`.
    """

    async def get(self, key: str) -> list[str] | None:
        ...

    async def set(self, key: str, values: Sequence[str]) -> None:
        ...
