"""
Data types used throughout the system.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Literal

SessionId = str

class Capability(str, Enum):
    CHAT = "chat"
    CODE_GENERATION = "code_generation"
    DEBUGGING = "debugging"

class Provider(str, Enum):
    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    LOCAL = "local"

class CommandKind(str, Enum):
    GENERATE = "generate"
    EXPLAIN = "explain"
    DEBUG = "debug"
    HELP = "help"
    UNKNOWN = "unknown"

@dataclass(frozen=True)
class Request:
    capability: Capability
    prompt: str

@dataclass(frozen=True)
class Response:
    content: str
    ok: bool = True
    model: Optional[str] = None
    error: Optional[str] = None

@dataclass(frozen=True)
class Command:
    kind: CommandKind
    arguments: List[str] = field(default_factory=list)
    full_input: str = ""
    capability: Optional[Capability] = Capability.CHAT  # None only for HELP

    def to_request(self) -> Request:
        if self.capability is None:
            raise ValueError(f"command is not routable: {self.kind.value}")
        return Request(capability=self.capability, prompt=self.full_input)

AuditEventType = Literal[
    "SessionStarted",
    "ModelRegistered",
    "ModelUpdated",
    "ModelUpdateIgnored",
    "ModelRemoved",
    "DefaultProviderChanged",
    "HelpShown",
    "RequestRouted",
    "NoMatchingModel",
    "ProviderFailed",
    "SessionClosed",
]

@dataclass(frozen=True)
class AuditEvent:
    session_id: SessionId
    type: AuditEventType
    ts_utc: str  # ISO8601
    payload: Dict[str, Any]
    prev_hash: Optional[str] = None
    hash: Optional[str] = None
