"""
Command parser for chat input.

Resolution order for the first token (lower-cased):
  1. registered prefix command ("/generate", "/explain", "/debug", "/help")
  2. natural-language verb ("generate", "create", "explain", "what",
     "debug", "fix")
  3. otherwise the whole input is a chat message
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from caproute.core.types import Capability, Command, CommandKind

logger = logging.getLogger(__name__)

PREFIX_MARKER = "/"

CAPABILITY_BY_KIND: Dict[CommandKind, Optional[Capability]] = {
    CommandKind.GENERATE: Capability.CODE_GENERATION,
    CommandKind.EXPLAIN: Capability.CHAT,
    CommandKind.DEBUG: Capability.DEBUGGING,
    CommandKind.HELP: None,
    CommandKind.UNKNOWN: Capability.CHAT,
}

NATURAL_LANGUAGE_VERBS: Dict[str, CommandKind] = {
    "generate": CommandKind.GENERATE,
    "create": CommandKind.GENERATE,
    "explain": CommandKind.EXPLAIN,
    "what": CommandKind.EXPLAIN,
    "debug": CommandKind.DEBUG,
    "fix": CommandKind.DEBUG,
}

NATURAL_LANGUAGE_HINT = (
    "You can also try phrasing your requests in natural language, "
    "e.g., 'generate a python function to sort a list'."
)


class CommandParser:
    def __init__(self) -> None:
        self._prefix_commands: Dict[str, CommandKind] = {
            "/generate": CommandKind.GENERATE,
            "/explain": CommandKind.EXPLAIN,
            "/debug": CommandKind.DEBUG,
            "/help": CommandKind.HELP,
        }

    def register_command(self, keyword: str, kind: CommandKind) -> None:
        key = keyword.strip().lower()
        if not key.startswith(PREFIX_MARKER):
            key = PREFIX_MARKER + key
        if key == PREFIX_MARKER:
            raise ValueError("command keyword must not be empty")
        if len(key.split()) != 1:
            # parse() splits on whitespace, so such a keyword could never match.
            raise ValueError(f"command keyword must be a single token: {keyword!r}")
        self._prefix_commands[key] = kind

    def _build(self, kind: CommandKind, arguments: List[str], text: str) -> Command:
        return Command(kind=kind, arguments=arguments, full_input=text, capability=CAPABILITY_BY_KIND[kind])

    def parse(self, text: str) -> Command:
        parts = text.split()
        if not parts:
            return self._build(CommandKind.UNKNOWN, [], text)

        keyword = parts[0].lower()
        arguments = parts[1:]

        kind = self._prefix_commands.get(keyword)
        if kind is None:
            kind = NATURAL_LANGUAGE_VERBS.get(keyword)
        if kind is None:
            return self._build(CommandKind.UNKNOWN, parts, text)

        logger.debug("parsed %r as %s", keyword, kind.value)
        return self._build(kind, arguments, text)

    def get_help(self) -> str:
        lines = ["Available commands:"]
        for prefix in sorted(self._prefix_commands):
            lines.append(f"  {prefix} - {self._prefix_commands[prefix].value}")
        return "\n".join(lines) + "\n\n" + NATURAL_LANGUAGE_HINT
