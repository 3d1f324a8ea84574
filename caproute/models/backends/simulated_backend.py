"""Deterministic stand-in for a provider call.
Used for tests, dry runs and any provider without a real client."""


from __future__ import annotations

from caproute.core.types import Request
from caproute.models.profiles import ModelConfig

SIMULATED_MARKER = "[Simulated AI Response]"


class SimulatedBackend:
    """
    Formats a reply instead of calling a provider.
    The reply always contains the prompt and the model name verbatim.
    """

    def complete(self, model: ModelConfig, request: Request, *, timeout_s: float = 0.0) -> str:
        return f"Response for '{request.prompt}' using {model.name}: {SIMULATED_MARKER}"
