"""Provider call seam used by the request router."""


from __future__ import annotations

from typing import Protocol

from caproute.core.types import Request
from caproute.models.profiles import ModelConfig


class ProviderBackend(Protocol):
    def complete(self, model: ModelConfig, request: Request, *, timeout_s: float) -> str:
        """
        Produce response content for `request` using `model`.

        May block up to `timeout_s`. Raising is allowed; the router turns
        any exception into an error response.
        """
        ...
