"""Environment-variable readers built on the guards.

Absence becomes either a :class:`~guardkit.errors.ConfigError` or a typed
default. A malformed value is reported as ``ConfigError`` too: the operator,
not a caller, supplied it. Empty values count as absent.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import TypeVar

from guardkit.errors import BadRequest, ConfigError
from guardkit.logging import get_logger
from guardkit.primitives import to_number
from guardkit.types import Guard

T = TypeVar("T")

_log = get_logger(__name__)


def _raw(key: str, environ: Mapping[str, str] | None) -> str | None:
    source = os.environ if environ is None else environ
    value = source.get(key)
    return value if value else None


def _missing(key: str) -> ConfigError:
    return ConfigError(f"Missing env {key}", label=key)


def env_value(
    key: str,
    guard: Guard[T],
    *,
    default: T | None = None,
    environ: Mapping[str, str] | None = None,
) -> T:
    """Apply ``guard`` to ``key``; fall back to ``default`` when it is unset."""
    raw = _raw(key, environ)
    if raw is None:
        if default is None:
            raise _missing(key)
        _log.debug("env %s not set; using default", key, extra={"env_key": key})
        return default
    try:
        return guard(raw)
    except BadRequest as exc:
        raise ConfigError(f"Env {key} is invalid: {exc.message}", label=key) from exc


def get_env(
    key: str, *, required: bool = True, environ: Mapping[str, str] | None = None
) -> str:
    raw = _raw(key, environ)
    if raw is None:
        if required:
            raise _missing(key)
        return ""
    return raw


def get_env_number(
    key: str,
    *,
    required: bool = True,
    default: float = 0.0,
    environ: Mapping[str, str] | None = None,
) -> float:
    if required and _raw(key, environ) is None:
        raise _missing(key)
    return env_value(key, to_number(key), default=default, environ=environ)


def require_env(key: str, environ: Mapping[str, str] | None = None) -> str:
    return get_env(key, required=True, environ=environ)


def env_csv(
    key: str, *, required: bool = True, environ: Mapping[str, str] | None = None
) -> list[str]:
    """Comma-separated list; items are trimmed and blanks dropped."""
    raw = _raw(key, environ)
    if raw is None:
        if required:
            raise _missing(key)
        return []
    return [part.strip() for part in raw.split(",") if part.strip()]
