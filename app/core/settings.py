"""
ReadyGas Settings

Validated, typed configuration read from the environment (and a local .env
file). Misconfigurations are caught when the settings object is built, not
on the first RPC call.

Usage:
    from app.core.container import Container
    from app.core.settings import settings

    container = Container(cfg=settings)
    await container.tx_gas_utils.analyze_gas_usage(tx_meta)
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any

from dotenv import load_dotenv

from execution.evm import CHAIN_ID_BY_NAME

# Load environment variables from .env file
load_dotenv()

LOG_LEVELS = ("debug", "info", "warning", "error", "critical")


class SettingsValidationError(Exception):
    """Raised when settings validation fails."""

    def __init__(self, field: str, value: Any, message: str):
        self.field = field
        self.value = value
        super().__init__(f"Invalid configuration for {field}={value!r}: {message}")


def _parse_bool(value: str | None, default: bool = False) -> bool:
    """Parse a boolean from environment variable."""
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in ("true", "1", "yes", "on")


def _parse_float(value: str | None, default: float | None = None) -> float | None:
    """Parse a float from environment variable."""
    if value is None or value.strip() == "":
        return default
    try:
        return float(value.strip())
    except ValueError:
        return default


@dataclass
class Settings:
    """
    Unified settings class with validation.
    """

    PROJECT_NAME: str = "ReadyGas"

    # RPC
    CHAIN: str = field(default_factory=lambda: os.getenv("READYGAS_CHAIN", "ethereum").strip().lower())
    RPC_URL: str | None = field(default_factory=lambda: (os.getenv("READYGAS_RPC_URL") or "").strip() or None)
    HTTP_TIMEOUT_SEC: float = field(default_factory=lambda: _parse_float(os.getenv("HTTP_TIMEOUT_SEC"), 10.0))

    # Observability
    READYGAS_LOG_LEVEL: str = field(default_factory=lambda: os.getenv("READYGAS_LOG_LEVEL", "info").strip().lower())
    READYGAS_LOG_JSON: bool = field(default_factory=lambda: _parse_bool(os.getenv("READYGAS_LOG_JSON"), True))
    READYGAS_SERVICE_NAME: str = field(default_factory=lambda: os.getenv("READYGAS_SERVICE_NAME", "readygas").strip())

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        self._validate()

    def _validate(self) -> None:
        if self.CHAIN not in CHAIN_ID_BY_NAME and not self.RPC_URL:
            raise SettingsValidationError(
                "READYGAS_CHAIN",
                self.CHAIN,
                f"unsupported chain (known: {', '.join(sorted(CHAIN_ID_BY_NAME))}); set READYGAS_RPC_URL to use another",
            )
        if self.HTTP_TIMEOUT_SEC <= 0:
            raise SettingsValidationError("HTTP_TIMEOUT_SEC", self.HTTP_TIMEOUT_SEC, "must be > 0")
        if self.READYGAS_LOG_LEVEL not in LOG_LEVELS:
            raise SettingsValidationError(
                "READYGAS_LOG_LEVEL", self.READYGAS_LOG_LEVEL, f"must be one of {', '.join(LOG_LEVELS)}"
            )

    def to_dict(self) -> dict[str, Any]:
        """Convert settings to dictionary (redacting secrets)."""
        result: dict[str, Any] = {}
        for key in dir(self):
            if key.startswith("_") or key.isupper() is False:
                continue
            value = getattr(self, key)
            # RPC URLs commonly embed provider API keys
            if any(s in key.upper() for s in ["SECRET", "PASSWORD", "KEY", "TOKEN", "URL"]):
                result[key] = "***REDACTED***" if value else None
            else:
                result[key] = value
        return result


# Global settings instance
settings = Settings()
