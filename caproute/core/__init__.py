"""
Shared vocabulary, codec, settings and audit log.
"""

from .types import Capability, Command, CommandKind, Provider, Request, Response
from .settings import Settings

__all__ = [
    "Capability",
    "Command",
    "CommandKind",
    "Provider",
    "Request",
    "Response",
    "Settings",
]
