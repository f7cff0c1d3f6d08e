"""Application configuration — loaded from config.json at project root.

The file holds planning defaults used when a plan file leaves a value
out (Hebesatz, Stammkapital) and by the VAT commands. The path can be
overridden with the UGPLAN_CONFIG environment variable.
"""

import json
import logging
import os
from dataclasses import dataclass, fields
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Optional

from .exceptions import ConfigError

logger = logging.getLogger(__name__)


@dataclass
class AppConfig:
    default_hebesatz: int = 400  # rough German average
    default_stammkapital: Decimal = Decimal("1")
    vat_rate: Decimal = Decimal("0.19")
    small_business: bool = False  # Kleinunternehmerregelung (§ 19 UStG)
    currency: str = "EUR"
    company_name: str = ""


_DEFAULTS = AppConfig()
_cached: Optional[AppConfig] = None
_path_override: Optional[Path] = None


def _find_project_root() -> Path:
    """Walk up from this file to find the project root (where pyproject.toml lives)."""
    current = Path(__file__).resolve().parent
    for _ in range(10):
        if (current / "pyproject.toml").exists():
            return current
        current = current.parent
    # Fallback: current working directory
    return Path.cwd()


def _config_path() -> Path:
    if _path_override is not None:
        return _path_override
    env = os.environ.get("UGPLAN_CONFIG")
    if env:
        return Path(env)
    return _find_project_root() / "config.json"


def set_config_path(path: Optional[str]) -> None:
    """Point config loading at another file (None restores the default) and drop the cache."""
    global _cached, _path_override
    _path_override = Path(path) if path else None
    _cached = None


def _from_dict(data: dict) -> AppConfig:
    return AppConfig(
        default_hebesatz=int(data.get("default_hebesatz", _DEFAULTS.default_hebesatz)),
        default_stammkapital=Decimal(str(data.get("default_stammkapital", 1))),
        vat_rate=Decimal(str(data.get("vat_rate", 0.19))),
        small_business=bool(data.get("small_business", False)),
        currency=data.get("currency", _DEFAULTS.currency),
        company_name=data.get("company_name", ""),
    )


def get_config() -> AppConfig:
    global _cached
    if _cached is not None:
        return _cached
    path = _config_path()
    if not path.exists():
        _cached = AppConfig()
        return _cached
    try:
        _cached = _from_dict(json.loads(path.read_text(encoding="utf-8")))
    except (OSError, ValueError, TypeError, InvalidOperation) as exc:
        logger.warning("Ignoring unreadable config %s: %s", path, exc)
        _cached = AppConfig()
    return _cached


def save_config(cfg: AppConfig) -> None:
    global _cached
    _cached = cfg
    data = {
        "default_hebesatz": cfg.default_hebesatz,
        "default_stammkapital": float(cfg.default_stammkapital),
        "vat_rate": float(cfg.vat_rate),
        "small_business": cfg.small_business,
        "currency": cfg.currency,
        "company_name": cfg.company_name,
    }
    path = _config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")


def update_config(key: str, raw_value: str) -> AppConfig:
    """Set one config field from its string form and persist the result.

    Raises:
        ConfigError: unknown key or a value that does not parse.
    """
    cfg = get_config()
    names = {f.name for f in fields(AppConfig)}
    if key not in names:
        raise ConfigError(f"Unknown config key '{key}'. Known keys: {', '.join(sorted(names))}")
    data = {name: getattr(cfg, name) for name in names}
    if key == "small_business":
        data[key] = raw_value.strip().lower() in ("1", "true", "yes", "ja", "on")
    else:
        data[key] = raw_value
    try:
        new_cfg = _from_dict(data)
    except (ValueError, InvalidOperation) as exc:
        raise ConfigError(f"Invalid value for {key}: {raw_value!r}") from exc
    save_config(new_cfg)
    return new_cfg
