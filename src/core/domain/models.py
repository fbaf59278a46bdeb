"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- El `Outcome` es lo único que cruza la frontera con la capa de presentación,
  así que debe ser siempre un valor serializable y renderizable.

Nota:
- Estos modelos describen *qué* es la información, no *cómo* se obtiene.
"""

from __future__ import annotations

from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


MISSING_SETUP_MESSAGE = "Missing required setup"
EMAIL_REQUIRED_MESSAGE = "Email is required."
INVALID_EMAIL_MESSAGE = "Invalid email."
ALREADY_SUBSCRIBED_MESSAGE = "Email is already subscribed"
SUBSCRIBED_MESSAGE = "Thank you for subscribing!"
GENERIC_FAILURE_MESSAGE = "Something went wrong. Please try again."


def _new_outcome_id() -> str:
    return uuid4().hex


class OutcomeKind(str, Enum):
    """Etiqueta del resultado de `subscribe`."""

    SUCCESS = "success"
    FAILURE = "failure"


class Outcome(BaseModel):
    """Resultado de una llamada a `subscribe`.

    Por qué un valor y no excepciones:
    - La capa de presentación siempre recibe algo que mostrar.
    - `id` es un token nuevo por llamada, solo para correlacionar mensajes en UI
      (no sirve para idempotencia ni deduplicación).
    """

    model_config = ConfigDict(frozen=True)

    kind: OutcomeKind = Field(..., description="success | failure.")
    message: str = Field(..., min_length=1, description="Texto para el usuario final.")
    id: str = Field(
        default_factory=_new_outcome_id,
        min_length=1,
        description="Token de correlación único por llamada.",
    )

    @classmethod
    def success(cls, message: str) -> "Outcome":
        return cls(kind=OutcomeKind.SUCCESS, message=message)

    @classmethod
    def failure(cls, message: str) -> "Outcome":
        return cls(kind=OutcomeKind.FAILURE, message=message)

    @property
    def ok(self) -> bool:
        return self.kind is OutcomeKind.SUCCESS


class ValidationResult(BaseModel):
    """Resultado del validador: `value` si pasa, `reason` si no."""

    model_config = ConfigDict(frozen=True)

    ok: bool
    value: str | None = Field(
        default=None,
        description="Email validado, idéntico al candidato (sin normalizar).",
    )
    reason: str | None = Field(
        default=None,
        description="Motivo legible del rechazo.",
    )

    @classmethod
    def accept(cls, value: str) -> "ValidationResult":
        return cls(ok=True, value=value)

    @classmethod
    def reject(cls, reason: str) -> "ValidationResult":
        return cls(ok=False, reason=reason)
