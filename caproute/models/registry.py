"""Model Registry
Owns the model name -> ModelConfig mapping and the default provider.
"""


from __future__ import annotations

import dataclasses
import logging
import threading
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

import yaml  # requires pyyaml

from caproute.core.audit import AuditWriter
from caproute.core.types import Capability, Provider
from caproute.models.profiles import ModelConfig

logger = logging.getLogger(__name__)

DEFAULT_MODELS = (
    ModelConfig(
        name="gpt-3.5-turbo",
        provider=Provider.OPENAI,
        capabilities=frozenset({Capability.CHAT, Capability.CODE_GENERATION}),
    ),
    ModelConfig(
        name="claude-2",
        provider=Provider.ANTHROPIC,
        capabilities=frozenset({Capability.CHAT, Capability.CODE_GENERATION}),
    ),
)


class ModelRegistry:
    """
    Single owner of the model configurations for a session.

    All reads and writes go through one lock:
      - register/update/remove on the same name are last-writer-wins
      - select_for_capability sees a consistent snapshot
    No method does I/O while holding the lock.
    """

    def __init__(
        self,
        *,
        default_provider: Provider = Provider.OPENAI,
        audit: Optional[AuditWriter] = None,
        session_id: str = "",
    ) -> None:
        self._lock = threading.RLock()
        self._models: Dict[str, ModelConfig] = {}
        self._default_provider = default_provider
        self._audit = audit
        self._session_id = session_id

    @classmethod
    def with_defaults(cls, **kwargs: Any) -> "ModelRegistry":
        reg = cls(**kwargs)
        for config in DEFAULT_MODELS:
            reg.register(config)
        return reg

    @staticmethod
    def _norm_scalar(v: Any) -> str:
        """
        YAML parses the literal `null` into Python None.
        We treat None as the canonical string "null" for model names.
        """
        if v is None:
            return "null"
        return str(v)

    @staticmethod
    def _parse_enum(enum_cls, raw: Any, what: str):
        try:
            return enum_cls(str(raw).strip().lower())
        except ValueError:
            allowed = ", ".join(m.value for m in enum_cls)
            raise ValueError(f"unknown {what}: {raw!r} (expected one of: {allowed})") from None

    @classmethod
    def load(cls, path: Path, **kwargs: Any) -> "ModelRegistry":
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        if not isinstance(data, dict):
            raise ValueError(f"models file must be a mapping: {path}")
        models_raw = data.get("models") or {}
        if not isinstance(models_raw, dict):
            raise ValueError(f"'models' must be a mapping of name -> config: {path}")

        default_raw = data.get("default_provider")
        if default_raw is not None:
            kwargs.setdefault("default_provider", cls._parse_enum(Provider, default_raw, "provider"))

        reg = cls(**kwargs)
        for name, cfg in models_raw.items():
            if cfg is None:
                continue
            name_s = cls._norm_scalar(name)
            if not isinstance(cfg, dict):
                raise ValueError(f"model entry must be a mapping: {name_s}")
            provider = cls._parse_enum(Provider, cfg.get("provider", reg.get_default_provider().value), "provider")
            caps_raw = cfg.get("capabilities") or []
            if isinstance(caps_raw, str):
                # `capabilities: chat` is shorthand for a one-item list.
                caps_raw = [caps_raw]
            caps = [cls._parse_enum(Capability, c, "capability") for c in caps_raw]
            reg.register(ModelConfig(name=name_s, provider=provider, capabilities=caps))

        logger.info("loaded %d model(s) from %s", len(reg), path)
        return reg

    def _record(self, type: str, payload: Dict[str, Any]) -> None:
        if self._audit is not None:
            self._audit.append(self._session_id, type, payload)

    def register(self, config: ModelConfig) -> None:
        """Insert or replace the entry for `config.name`. No merge."""
        with self._lock:
            replaced = config.name in self._models
            self._models[config.name] = config
        logger.debug("registered model %s (replaced=%s)", config.name, replaced)
        self._record(
            "ModelRegistered",
            {
                "name": config.name,
                "provider": config.provider,
                "capabilities": config.capabilities,
                "replaced": replaced,
            },
        )

    def update(self, name: str, new_config: ModelConfig) -> bool:
        """
        Replace the entry for `name` only if it already exists.
        An unknown name is ignored; the return value tells the caller which
        case happened. The stored config is renamed to `name` so the key and
        `config.name` always agree.
        """
        if new_config.name != name:
            new_config = dataclasses.replace(new_config, name=name)
        with self._lock:
            if name not in self._models:
                found = False
            else:
                found = True
                self._models[name] = new_config

        if not found:
            logger.debug("update ignored, unknown model: %s", name)
            self._record("ModelUpdateIgnored", {"name": name})
            return False

        self._record(
            "ModelUpdated",
            {"name": name, "provider": new_config.provider, "capabilities": new_config.capabilities},
        )
        return True

    def remove(self, name: str) -> bool:
        with self._lock:
            removed = self._models.pop(name, None) is not None
        if removed:
            self._record("ModelRemoved", {"name": name})
        return removed

    def assign_capability(self, name: str, capability: Capability) -> bool:
        """Add one capability to an existing model. False if the model is unknown."""
        with self._lock:
            existing = self._models.get(name)
            if existing is None:
                logger.debug("model %s not found for capability assignment", name)
                return False
            if existing.supports(capability):
                return True
            # Read-modify-write under one lock so a concurrent register is not lost.
            updated = existing.with_capabilities(existing.capabilities | {capability})
            self._models[name] = updated

        self._record(
            "ModelUpdated",
            {"name": name, "provider": updated.provider, "capabilities": updated.capabilities},
        )
        return True

    def select_for_capability(self, capability: Capability) -> Optional[ModelConfig]:
        """
        Return some model supporting `capability`, or None.

        The first match in storage order wins. Callers must not depend on
        which of several qualifying models comes back.
        """
        with self._lock:
            candidates = list(self._models.values())
        for config in candidates:
            if config.supports(capability):
                return config
        return None

    def set_default_provider(self, provider: Provider) -> None:
        with self._lock:
            self._default_provider = provider
        self._record("DefaultProviderChanged", {"provider": provider})

    def get_default_provider(self) -> Provider:
        with self._lock:
            return self._default_provider

    def get(self, name: str) -> Optional[ModelConfig]:
        with self._lock:
            return self._models.get(name)

    def names(self) -> List[str]:
        with self._lock:
            return list(self._models.keys())

    def snapshot(self) -> Dict[str, ModelConfig]:
        with self._lock:
            return dict(self._models)

    def __len__(self) -> int:
        with self._lock:
            return len(self._models)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._models

    def __iter__(self) -> Iterator[ModelConfig]:
        return iter(self.snapshot().values())
