"""
Chat session: the collaborator that drives the routing core.

parse -> (help answered locally) -> route -> history
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

from caproute.commands import CommandParser
from caproute.core.audit import AuditWriter
from caproute.core.settings import Settings
from caproute.core.types import CommandKind, Provider
from caproute.models import ModelRegistry, RequestRouter
from caproute.models.backends import ProviderBackend

from apps.chat.audit import get_audit_writer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChatMessage:
    sender: str  # "User", "AI" or "System"
    content: str
    is_code_snippet: bool = False


class ChatSession:
    def __init__(
        self,
        *,
        registry: ModelRegistry,
        router: RequestRouter,
        parser: Optional[CommandParser] = None,
        audit: Optional[AuditWriter] = None,
        session_id: str = "",
    ) -> None:
        self._registry = registry
        self._router = router
        self._parser = parser or CommandParser()
        self._audit = audit
        self.session_id = session_id
        self.history: List[ChatMessage] = []
        self.available_models: List[str] = registry.names()
        self.selected_model: Optional[str] = None
        self._closed = False

    @property
    def registry(self) -> ModelRegistry:
        return self._registry

    def _add_message(self, sender: str, content: str, is_code_snippet: bool = False) -> ChatMessage:
        msg = ChatMessage(sender=sender, content=content, is_code_snippet=is_code_snippet)
        self.history.append(msg)
        return msg

    def send_message(self, text: str) -> ChatMessage:
        """Record the user's text and return the reply that was appended."""
        if self._closed:
            raise RuntimeError("session is closed")

        self._add_message("User", text)
        command = self._parser.parse(text)

        if command.kind == CommandKind.HELP:
            if self._audit is not None:
                self._audit.append(self.session_id, "HelpShown", {})
            return self._add_message("System", self._parser.get_help())

        response = self._router.handle(command.to_request())
        return self._add_message("AI", response.content)

    def add_code_snippet(self, code: str) -> ChatMessage:
        return self._add_message("AI", code, is_code_snippet=True)

    def select_model(self, name: str) -> bool:
        if name not in self.available_models:
            logger.warning("model %s not available", name)
            return False
        self.selected_model = name
        return True

    def update_available_models(self, names: List[str]) -> None:
        self.available_models = list(names)
        if self.selected_model is not None and self.selected_model not in self.available_models:
            self.selected_model = None

    def refresh_models(self) -> None:
        self.update_available_models(self._registry.names())

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._audit is not None:
            self._audit.append(self.session_id, "SessionClosed", {"messages": len(self.history)})


def open_session(
    settings: Settings,
    *,
    session_id: Optional[str] = None,
    backends: Optional[Dict[Provider, ProviderBackend]] = None,
) -> ChatSession:
    """
    Wire registry, router and parser for one session.

    When auditing is on, SessionStarted is written before the registry is
    loaded so model registrations land inside the session.
    """
    session_id = session_id or uuid.uuid4().hex
    audit: Optional[AuditWriter] = None
    if settings.audit_enabled:
        audit = get_audit_writer(settings.runtime_root, session_id)
        audit.append(session_id, "SessionStarted", {"models_path": str(settings.models_path)})

    if Path(settings.models_path).exists():
        registry = ModelRegistry.load(settings.models_path, audit=audit, session_id=session_id)
    else:
        logger.warning("models file %s not found, using built-in defaults", settings.models_path)
        registry = ModelRegistry.with_defaults(audit=audit, session_id=session_id)

    router = RequestRouter(
        registry,
        backends=backends,
        timeout_s=settings.provider_timeout_s,
        audit=audit,
        session_id=session_id,
    )
    return ChatSession(registry=registry, router=router, audit=audit, session_id=session_id)
