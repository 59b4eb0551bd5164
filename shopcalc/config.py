"""Layered settings: defaults, YAML files, then environment variables.

``common.yaml`` is read first and ``<environment>.yaml`` overrides it, so a
deployment only has to spell out what differs from the shared file.
Example ``configs/prod.yaml``::

    shipping:
      flat_fee: "7.50"
      free_threshold: "100.00"
    lookups:
      timeout: 2.0
"""
import logging
import os
from dataclasses import dataclass, replace
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Mapping, Optional

import yaml

from .errors import ConfigError

logger = logging.getLogger("shopcalc.config")

ENV_VARS = {
    "shipping_fee": "SHOPCALC_SHIPPING_FEE",
    "free_shipping_threshold": "SHOPCALC_FREE_SHIPPING_THRESHOLD",
    "lookup_timeout": "SHOPCALC_LOOKUP_TIMEOUT",
}

YAML_KEYS = {
    "shipping_fee": "shipping.flat_fee",
    "free_shipping_threshold": "shipping.free_threshold",
    "lookup_timeout": "lookups.timeout",
}


@dataclass(frozen=True)
class Settings:
    environment: str = "dev"
    shipping_fee: Decimal = Decimal("5.00")
    free_shipping_threshold: Optional[Decimal] = None
    lookup_timeout: Optional[float] = None


def _get_nested(data: Dict[str, Any], key: str, default: Any = None) -> Any:
    value: Any = data
    for k in key.split("."):
        if isinstance(value, dict) and k in value:
            value = value[k]
        else:
            return default
    return value


def _read_yaml(path: str) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as exc:
        raise ConfigError(f"cannot read {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping, got {type(data).__name__}")
    logger.info("loaded config %s", path)
    return data


def _amount(field_name: str, raw: Any) -> Decimal:
    if isinstance(raw, bool):
        raise ConfigError(f"{field_name} must be a number, got {raw!r}")
    try:
        value = Decimal(str(raw))
    except InvalidOperation:
        raise ConfigError(f"{field_name} must be a number, got {raw!r}") from None
    if not value.is_finite() or value < 0:
        raise ConfigError(f"{field_name} must be a non-negative number, got {raw!r}")
    return value


def _coerce(field_name: str, raw: Any) -> Any:
    if raw is None or raw == "":
        if field_name == "shipping_fee":
            raise ConfigError("shipping_fee cannot be empty")
        return None
    value = _amount(field_name, raw)
    if field_name == "lookup_timeout":
        if value == 0:
            raise ConfigError("lookup_timeout must be greater than zero")
        return float(value)
    return value


def load_settings(
    environment: Optional[str] = None,
    config_dir: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Settings:
    if environ is None:
        environ = os.environ
    environment = environment or environ.get("SHOPCALC_ENV") or "dev"
    config_dir = config_dir or environ.get("SHOPCALC_CONFIG_DIR", "configs")

    settings = Settings(environment=environment)
    overrides: Dict[str, Any] = {}

    for name in ("common.yaml", f"{environment}.yaml"):
        path = os.path.join(config_dir, name)
        if not os.path.exists(path):
            continue
        data = _read_yaml(path)
        for field_name, key in YAML_KEYS.items():
            sentinel = object()
            raw = _get_nested(data, key, sentinel)
            if raw is not sentinel:
                overrides[field_name] = _coerce(field_name, raw)

    for field_name, var in ENV_VARS.items():
        if var in environ:
            overrides[field_name] = _coerce(field_name, environ[var])

    return replace(settings, **overrides)
