from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable

try:
    import tomllib
except ModuleNotFoundError:  # pragma: no cover - py311+
    import tomli as tomllib

from nginx_sm import paths, system
from nginx_sm.nginx import Nginx
from nginx_sm.prompt import TerminalInput


@dataclass(frozen=True)
class Settings:
    nginx_binary: str = paths.NGINX_BIN
    editor: str = paths.DEFAULT_EDITOR
    sites_available: str | None = None
    sites_enabled: str | None = None


@dataclass
class SiteContext:
    """
    Everything an operation needs, passed explicitly.
    `nginx`, `input` and `is_root` are swapped for doubles in tests.
    """
    sites_available: Path
    sites_enabled: Path
    nginx: Nginx
    editor: str = paths.DEFAULT_EDITOR
    input: TerminalInput = field(default_factory=TerminalInput)
    is_root: Callable[[], bool] = system.is_root


def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def read_settings(path: Path | None = None) -> Settings:
    if path is None:
        path = paths.CONFIG_PATH
    if not path.exists():
        return Settings()
    raw = tomllib.loads(path.read_text(encoding="utf-8"))
    nginx_raw = raw.get("nginx", {})
    editor_raw = raw.get("editor", {})
    return Settings(
        nginx_binary=_optional_str(nginx_raw.get("binary")) or paths.NGINX_BIN,
        editor=_optional_str(editor_raw.get("command")) or paths.DEFAULT_EDITOR,
        sites_available=_optional_str(nginx_raw.get("sites_available")),
        sites_enabled=_optional_str(nginx_raw.get("sites_enabled")),
    )


def resolve_site_dirs(settings: Settings, nginx: Nginx) -> tuple[Path, Path]:
    if settings.sites_available and settings.sites_enabled:
        sites_available = Path(settings.sites_available).resolve()
        sites_enabled = Path(settings.sites_enabled).resolve()
    else:
        if not nginx.installed():
            raise SystemExit(f"Error: {nginx.binary} command not found.")
        conf_dir = nginx.conf_path().parent
        sites_available = conf_dir / paths.SITES_AVAILABLE_NAME
        sites_enabled = conf_dir / paths.SITES_ENABLED_NAME

    if not sites_available.is_dir() or not sites_enabled.is_dir():
        raise SystemExit("Error: Unable to find NGINX sites-available or sites-enabled directory.")
    return sites_available, sites_enabled
