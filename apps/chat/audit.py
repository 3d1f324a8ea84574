"""
Audit helpers for the chat app. No side effects on import.
"""

from __future__ import annotations

from pathlib import Path

from caproute.core.audit import AuditWriter


def get_audit_writer(runtime_root: Path, session_id: str) -> AuditWriter:
    return AuditWriter(runtime_root / "logs" / f"session-{session_id}.jsonl")
