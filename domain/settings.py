"""Runtime configuration.

Settings come from ``data/portfolio_config.json`` (missing or broken file ->
built-in defaults) and can be overridden per deployment with ``PORTFOLIO_*``
environment variables. The source and routing modes are read once at startup
and never change for a running session.
"""
from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Optional

from domain.models import RoutingMode, SourceMode
from utils.paths import resolve_data_file

logger = logging.getLogger(__name__)

CONFIG_FILENAME = 'portfolio_config.json'

_ENV_OVERRIDES = {
    'PORTFOLIO_SOURCE_MODE': 'source_mode',
    'PORTFOLIO_ROUTING_MODE': 'routing_mode',
    'PORTFOLIO_BASE_URL': 'base_url',
    'PORTFOLIO_ROOT': 'portfolio_root',
    'PORTFOLIO_MANIFEST': 'manifest_file',
    'PORTFOLIO_PREFETCH_CONCURRENCY': 'prefetch_concurrency',
}


@dataclass(frozen=True)
class PortfolioSettings:
    source_mode: SourceMode = SourceMode.LISTING
    routing_mode: RoutingMode = RoutingMode.HASH
    base_url: str = 'http://localhost:3000'
    portfolio_root: str = 'portfolio'
    manifest_file: str = 'manifest.json'
    # 0 means no cap; every image request runs at once
    prefetch_concurrency: int = 0
    request_timeout: float = 10.0

    @property
    def listing_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/{self.portfolio_root.strip('/')}/"

    @property
    def asset_root(self) -> str:
        return self.listing_url


def _load_json(path: Optional[str]) -> Dict[str, Any]:
    if not path:
        return {}
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning(f"Ignoring unreadable config {path}: {e}")
        return {}
    return data if isinstance(data, dict) else {}


def _coerce(key: str, value: Any, default: Any) -> Any:
    try:
        if key == 'source_mode':
            return SourceMode(str(value).lower())
        if key == 'routing_mode':
            return RoutingMode(str(value).lower())
        if key == 'prefetch_concurrency':
            return max(0, int(value))
        if key == 'request_timeout':
            return float(value)
        return str(value)
    except (TypeError, ValueError):
        logger.warning(f"Invalid value {value!r} for {key}, using {default!r}")
        return default


def load_settings(path: Optional[str] = None, environ: Optional[Dict[str, str]] = None) -> PortfolioSettings:
    """Build settings from the config file, then apply environment overrides."""
    environ = os.environ if environ is None else environ
    defaults = PortfolioSettings()
    known = {f.name for f in fields(PortfolioSettings)}

    raw = _load_json(path or resolve_data_file(CONFIG_FILENAME))
    values = {k: v for k, v in raw.items() if k in known}
    for env_key, field_name in _ENV_OVERRIDES.items():
        if environ.get(env_key):
            values[field_name] = environ[env_key]

    coerced = {k: _coerce(k, v, getattr(defaults, k)) for k, v in values.items()}
    return replace(defaults, **coerced)
