"""
Environment-driven settings.

Defaults:
  - CAPROUTE_MODELS           -> configs/models.yaml
  - CAPROUTE_RUNTIME          -> runtime
  - CAPROUTE_AUDIT            -> false (no audit JSONL written)
  - CAPROUTE_PROVIDER_TIMEOUT -> 30 seconds per backend call
  - CAPROUTE_LOG_LEVEL        -> WARNING
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import os


def env_flag(name: str, default: str = "false") -> bool:
    v = os.environ.get(name, default).strip().lower()
    return v in {"1", "true", "yes", "y", "on"}


def env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


@dataclass(frozen=True)
class Settings:
    models_path: Path
    runtime_root: Path
    audit_enabled: bool = False
    provider_timeout_s: float = 30.0
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            models_path=Path(os.environ.get("CAPROUTE_MODELS", "configs/models.yaml")),
            runtime_root=Path(os.environ.get("CAPROUTE_RUNTIME", "runtime")),
            audit_enabled=env_flag("CAPROUTE_AUDIT", "false"),
            provider_timeout_s=env_float("CAPROUTE_PROVIDER_TIMEOUT", 30.0),
            log_level=os.environ.get("CAPROUTE_LOG_LEVEL", "WARNING").strip().upper() or "WARNING",
        )
