"""Loading of the service configuration from a YAML file."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from wavely.auth import AuthError, build_auth_provider
from wavely.data import WavelyConfig
from wavely.tmpl import TemplateError, prepare_templates

CONFIG_DIR = "/app/config"
CONFIG_NAME = "wavely.cfg"

_log = logging.getLogger("wavely")


class ConfigError(Exception):
    """Raised when the auth provider cannot be built."""


def load_config(path: str | Path | None = None) -> WavelyConfig:
    """Read the configuration at ``path``; missing or bad files give defaults."""
    raw = {}
    if path is None or not Path(path).is_file():
        _log.warning("Konfigurationsdatei nicht gefunden, verwende Standardwerte")
    else:
        try:
            raw = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
        except (OSError, yaml.YAMLError) as exc:
            _log.error("Fehler beim Lesen der Konfigurationsdatei: %s", exc)
    try:
        cfg = WavelyConfig.from_dict(raw)
    except (ValueError, TypeError, AttributeError) as exc:
        _log.error("Fehler beim Lesen der Konfigurationsdatei: %s", exc)
        cfg = WavelyConfig()

    try:
        prepare_templates(cfg)
    except TemplateError as exc:
        _log.error("Fehler beim Parsen der Templates: %s", exc)

    try:
        cfg.current.auth_provider = build_auth_provider(cfg.current.auth)
    except AuthError as exc:
        raise ConfigError(
            f"Fehler beim Erzeugen des AuthProviders für {cfg.current.name}: {exc}") from exc
    return cfg


def init_config(config_dir: str | Path = CONFIG_DIR) -> WavelyConfig:
    """Load ``wavely.cfg`` (yaml) from ``config_dir``."""
    candidates = (Path(config_dir) / f"{CONFIG_NAME}{ext}" for ext in (".yaml", ".yml", ""))
    return load_config(next((p for p in candidates if p.is_file()), None))