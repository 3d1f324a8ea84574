"""
Append-only audit log with hash chaining.
Each entry is a JSON object with fields:
  - session_id: str
  - type: str
  - ts_utc: str (ISO 8601 UTC timestamp)
  - payload: Dict[str, Any] (redacted)
  - prev_hash: Optional[str] (hash of previous entry)
  - hash: str (SHA-256 hash of the entry excluding the hash field itself)
"""

from __future__ import annotations

from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, Optional, Tuple
import json
import logging
import re
import threading
import time

from caproute.core.codec import stable_sha256, canonical_json_bytes, canonicalize
from caproute.core.types import AuditEvent

logger = logging.getLogger(__name__)

REDACT_PATTERNS = [
    re.compile(r"(?i)(api[_-]?key\s*[:=]\s*)(['\"][^'\"]+['\"])"),
    re.compile(r"(?i)(authorization\s*[:=]\s*)(['\"][^'\"]+['\"])"),
    re.compile(r"(?i)sk-[A-Za-z0-9]{20,}"),
]


def redact_text(s: str) -> str:
    out = s
    for pat in REDACT_PATTERNS:
        out = pat.sub("[REDACTED]", out)
    return out


def _utc_iso() -> str:
    return time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime())


def _redact_payload(payload: Dict[str, Any]) -> Dict[str, Any]:
    """
    Conservative redaction:
      - If a value is a string, run redact_text()
      - If dict/list, recurse
      - Else keep as-is
    """
    def walk(v: Any) -> Any:
        if isinstance(v, str):
            return redact_text(v)
        if isinstance(v, dict):
            return {k: walk(v[k]) for k in v}
        if isinstance(v, list):
            return [walk(x) for x in v]
        return v

    return walk(canonicalize(payload))  # type: ignore[return-value]


class AuditWriter:
    """
    Append-only JSONL audit log with hash chaining.

    File format: one JSON object per line:
      { session_id, type, ts_utc, payload, prev_hash, hash }

    Appends are serialized, so one writer may be shared by the registry,
    the router and the chat session.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()
        self._last_hash: Optional[str] = None
        if self.path.exists():
            # Recover last hash from file tail if present.
            self._last_hash = _read_last_hash(self.path)

    def append(self, session_id: str, type: str, payload: Dict[str, Any]) -> AuditEvent:
        with self._lock:
            ev = AuditEvent(
                session_id=session_id,
                type=type,  # type: ignore[arg-type]
                ts_utc=_utc_iso(),
                payload=_redact_payload(payload),
                prev_hash=self._last_hash,
                hash=None,
            )
            # Hash is computed over the canonical form with hash=None.
            ev_dict = asdict(ev)
            ev_dict["hash"] = None
            h = stable_sha256(ev_dict)
            ev = AuditEvent(**{**asdict(ev), "hash": h})
            self._write_line(ev)
            self._last_hash = h
        logger.debug("audit %s %s", type, h[:12])
        return ev

    def _write_line(self, ev: AuditEvent) -> None:
        line = canonical_json_bytes(asdict(ev)).decode("utf-8")
        with self.path.open("a", encoding="utf-8") as f:
            f.write(line + "\n")


def _read_last_hash(path: Path) -> Optional[str]:
    try:
        with path.open("rb") as f:
            f.seek(0, 2)
            size = f.tell()
            if size == 0:
                return None
            # Read last ~8KB for tail scan (enough for last line)
            f.seek(max(0, size - 8192))
            tail = f.read().decode("utf-8", errors="ignore").splitlines()
            for line in reversed(tail):
                line = line.strip()
                if not line:
                    continue
                obj = json.loads(line)
                return obj.get("hash")
    except (OSError, ValueError) as e:
        logger.warning("could not recover last audit hash from %s: %s", path, e)
        return None
    return None


def verify_audit_log(path: Path) -> Tuple[bool, Optional[str]]:
    """
    Verify hash chain and hashes.
    Returns (ok, error_message).
    """
    if not path.exists():
        return False, "audit log does not exist"

    prev: Optional[str] = None
    for line_no, line in enumerate(path.read_text(encoding="utf-8").splitlines(), start=1):
        if not line.strip():
            continue
        obj = json.loads(line)
        if obj.get("prev_hash") != prev:
            return False, f"prev_hash mismatch at line {line_no}"
        expected_hash = obj.get("hash")
        obj2 = dict(obj)
        obj2["hash"] = None
        actual = stable_sha256(obj2)
        if expected_hash != actual:
            return False, f"hash mismatch at line {line_no}"
        prev = expected_hash
    return True, None
