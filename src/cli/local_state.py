"""Last submitted address, kept in the user config dir for return visits."""

from __future__ import annotations

from pathlib import Path

from core.config import get_user_config_dir


def _last_email_path() -> Path:
    return get_user_config_dir() / "last_email"


def remember_email(email: str) -> Path:
    path = _last_email_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(email + "\n", encoding="utf-8")
    return path


def load_last_email() -> str | None:
    path = _last_email_path()
    if not path.is_file():
        return None
    value = path.read_text(encoding="utf-8").strip()
    return value or None
