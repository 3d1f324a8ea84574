"""Request Router
Resolves a request's capability to a registered model and calls its backend.
"""


from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from caproute.core.audit import AuditWriter
from caproute.core.types import Provider, Request, Response
from caproute.models.backends import ProviderBackend, SimulatedBackend
from caproute.models.profiles import ModelConfig
from caproute.models.registry import ModelRegistry

logger = logging.getLogger(__name__)

NO_MODEL_CONTENT = "Error: No suitable model found."


class RequestRouter:
    """
    Stateless per call: each `handle` reads the registry's current state.
    Failures come back as error responses, never as exceptions.
    """

    def __init__(
        self,
        registry: ModelRegistry,
        *,
        backends: Optional[Dict[Provider, ProviderBackend]] = None,
        default_backend: Optional[ProviderBackend] = None,
        timeout_s: float = 30.0,
        audit: Optional[AuditWriter] = None,
        session_id: str = "",
    ) -> None:
        self._registry = registry
        self._backends: Dict[Provider, ProviderBackend] = dict(backends or {})
        self._default_backend = default_backend or SimulatedBackend()
        self._timeout_s = timeout_s
        self._audit = audit
        self._session_id = session_id

    def _record(self, type: str, payload: Dict[str, Any]) -> None:
        if self._audit is not None:
            self._audit.append(self._session_id, type, payload)

    def get_backend_for_model(self, model: ModelConfig) -> ProviderBackend:
        return self._backends.get(model.provider, self._default_backend)

    def handle(self, request: Request) -> Response:
        model = self._registry.select_for_capability(request.capability)

        if model is None:
            logger.warning("no suitable model found for capability %s", request.capability.value)
            self._record("NoMatchingModel", {"capability": request.capability})
            return Response(content=NO_MODEL_CONTENT, ok=False, error="no matching model")

        backend = self.get_backend_for_model(model)
        logger.info("using model %s from provider %s", model.name, model.provider.value)

        try:
            content = backend.complete(model, request, timeout_s=self._timeout_s)
        except Exception as e:
            err = f"{e.__class__.__name__}: {e}"
            logger.error("provider call failed for model %s: %s", model.name, err)
            self._record(
                "ProviderFailed",
                {"capability": request.capability, "model": model.name, "error": err},
            )
            return Response(content=f"Error: provider call failed ({err})", ok=False, model=model.name, error=err)

        self._record(
            "RequestRouted",
            {
                "capability": request.capability,
                "model": model.name,
                "provider": model.provider,
                "prompt": request.prompt,
            },
        )
        return Response(content=content, ok=True, model=model.name)
