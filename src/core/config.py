"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Resuelve una única vez si hay store configurado (modo normal) o no
  (modo degradado), en vez de dispersar checks por el código.
"""

from __future__ import annotations

import os
import sys
from enum import Enum
from pathlib import Path

from pydantic import AliasChoices, BaseModel, Field, field_validator
from pydantic.config import ConfigDict
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "mailcapture"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "mailcapture"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "mailcapture"
    return Path.home() / ".config" / "mailcapture"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str]) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# mailcapture user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class LogLevel(str, Enum):
    """Niveles de logging aceptados (nombres de `logging`)."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class StoreConfig(BaseModel):
    """Parámetros de conexión ya resueltos para el store remoto.

    Solo existe cuando URL y token están presentes; su ausencia es el modo
    degradado, no un error.
    """

    model_config = ConfigDict(frozen=True)

    url: str = Field(..., min_length=1, description="Endpoint REST del store.")
    token: str = Field(..., min_length=1, repr=False, description="Token de acceso.")
    key: str = Field(default="emails", min_length=1, description="Clave de la lista.")
    timeout_seconds: float = Field(default=10.0, gt=0)
    user_agent: str = Field(default="mailcapture/0.1", min_length=1)


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Las credenciales del store se aceptan con prefijo (`MAILCAPTURE_KV_REST_API_URL`)
    o con los nombres que usa la integración de Vercel KV (`KV_REST_API_URL`).
    """

    model_config = SettingsConfigDict(
        env_prefix="MAILCAPTURE_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
        populate_by_name=True,
    )

    kv_rest_api_url: str | None = Field(
        default=None,
        validation_alias=AliasChoices("MAILCAPTURE_KV_REST_API_URL", "KV_REST_API_URL"),
        description="Endpoint REST (Upstash / Vercel KV).",
    )
    kv_rest_api_token: str | None = Field(
        default=None,
        validation_alias=AliasChoices("MAILCAPTURE_KV_REST_API_TOKEN", "KV_REST_API_TOKEN"),
        repr=False,
        description="Token bearer del store.",
    )
    subscribers_key: str = Field(
        default="emails",
        min_length=1,
        description="Clave bajo la que vive la lista de suscriptores.",
    )
    http_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Timeout por request al store (segundos).",
    )
    user_agent: str = Field(
        default="mailcapture/0.1",
        min_length=1,
        description="User-Agent para las peticiones al store.",
    )
    log_level: LogLevel = Field(
        default=LogLevel.WARNING,
        description="Nivel de logging de la CLI.",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: object) -> object:
        return value.strip().upper() if isinstance(value, str) else value

    def store_config(self) -> StoreConfig | None:
        """Devuelve la config del store, o `None` si falta URL o token."""

        url = (self.kv_rest_api_url or "").strip()
        token = (self.kv_rest_api_token or "").strip()
        if not url or not token:
            return None
        return StoreConfig(
            url=url,
            token=token,
            key=self.subscribers_key,
            timeout_seconds=self.http_timeout_seconds,
            user_agent=self.user_agent,
        )
