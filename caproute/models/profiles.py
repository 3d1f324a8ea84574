"""Data models for registered model configurations (models.yaml)."""


from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Iterable

from caproute.core.types import Capability, Provider


@dataclass(frozen=True)
class ModelConfig:
    """
    A named, provider-tagged bundle of supported capabilities.

    `capabilities` accepts any iterable and is stored as a frozenset, so
    order and duplicates carry no meaning. An empty set is valid but the
    model is never selected.
    """
    name: str
    provider: Provider
    capabilities: FrozenSet[Capability] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        object.__setattr__(self, "provider", Provider(self.provider))
        object.__setattr__(self, "capabilities", frozenset(Capability(c) for c in self.capabilities))

    def supports(self, capability: Capability) -> bool:
        return capability in self.capabilities

    def with_capabilities(self, capabilities: Iterable[Capability]) -> "ModelConfig":
        return ModelConfig(name=self.name, provider=self.provider, capabilities=frozenset(capabilities))
