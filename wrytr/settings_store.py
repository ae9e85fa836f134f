from __future__ import annotations

import configparser
import os
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import urlparse

from wrytr.i18n import normalize_language
from wrytr.transcription_client import DEFAULT_SERVER_URL


@dataclass
class AppSettings:
    server_url: str = DEFAULT_SERVER_URL
    request_timeout_sec: float = 600.0
    toast_duration_ms: int = 5000
    last_open_dir: str = ""
    ui_language: str = "en"


def get_settings_path() -> Path:
    appdata = os.getenv("APPDATA")
    if appdata:
        base = Path(appdata)
    else:
        base = Path.home() / ".config"
    settings_dir = base / "Wrytr"
    settings_dir.mkdir(parents=True, exist_ok=True)
    return settings_dir / "settings.ini"


def load_settings() -> AppSettings:
    settings_path = get_settings_path()
    if settings_path.exists():
        parser = configparser.ConfigParser()
        parser.read(settings_path, encoding="utf-8")
        return _from_parser(parser)

    settings = AppSettings()
    save_settings(settings)
    return settings


def save_settings(settings: AppSettings) -> None:
    parser = configparser.ConfigParser()
    parser["main"] = {
        "server_url": settings.server_url,
        "request_timeout_sec": str(settings.request_timeout_sec),
        "toast_duration_ms": str(settings.toast_duration_ms),
        "last_open_dir": settings.last_open_dir,
        "ui_language": settings.ui_language,
    }
    with open(get_settings_path(), "w", encoding="utf-8") as fh:
        parser.write(fh)


def _from_parser(parser: configparser.ConfigParser) -> AppSettings:
    section = parser["main"] if parser.has_section("main") else {}
    return AppSettings(
        server_url=coerce_server_url(str(section.get("server_url", DEFAULT_SERVER_URL))),
        request_timeout_sec=_clamp_float(_get_float(section, "request_timeout_sec", 600.0), 5.0, 3600.0),
        toast_duration_ms=_clamp_int(_get_int(section, "toast_duration_ms", 5000), 1000, 60000),
        last_open_dir=str(section.get("last_open_dir", "")),
        ui_language=normalize_language(str(section.get("ui_language", "en"))),
    )


def coerce_server_url(value: str, fallback: str = DEFAULT_SERVER_URL) -> str:
    url = str(value or "").strip().rstrip("/")
    parsed = urlparse(url)
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        return fallback
    return url


def _get_int(section, key: str, default: int) -> int:
    try:
        return int(str(section.get(key, str(default))).strip())
    except ValueError:
        return default


def _get_float(section, key: str, default: float) -> float:
    try:
        return float(str(section.get(key, str(default))).strip())
    except ValueError:
        return default


def _clamp_int(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def _clamp_float(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))
