from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from guardkit.env import env_value
from guardkit.primitives import (
    DEFAULT_JSON_MAX_BYTES,
    non_empty,
    one_of,
    parse_json,
    to_int,
    to_trimmed,
)
from guardkit.types import Guard

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _log_level(raw: object) -> str:
    level = to_trimmed("GUARDKIT_LOG_LEVEL")(raw).upper()
    return one_of("GUARDKIT_LOG_LEVEL", LOG_LEVELS)(level)


@dataclass(frozen=True)
class Settings:
    """Library settings read from ``GUARDKIT_*`` environment variables."""

    json_max_bytes: int
    log_level: str
    environment: str

    @staticmethod
    def from_env(environ: Mapping[str, str] | None = None) -> Settings:
        prefix = "GUARDKIT_"
        json_max_bytes = env_value(
            f"{prefix}JSON_MAX_BYTES",
            to_int(f"{prefix}JSON_MAX_BYTES", ge=1),
            default=DEFAULT_JSON_MAX_BYTES,
            environ=environ,
        )
        log_level = env_value(
            f"{prefix}LOG_LEVEL",
            _log_level,
            default="INFO",
            environ=environ,
        )
        environment = env_value(
            f"{prefix}ENV",
            non_empty(f"{prefix}ENV"),
            default="local",
            environ=environ,
        )
        return Settings(
            json_max_bytes=json_max_bytes, log_level=log_level, environment=environment
        )

    def json_guard(self, label: str) -> Guard[object]:
        """:func:`~guardkit.primitives.parse_json` bounded by ``json_max_bytes``."""
        return parse_json(label, self.json_max_bytes)
