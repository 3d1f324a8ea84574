"""Replay session audit logs to verify integrity and ordering.

"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional
import json

from .writer import verify_audit_log
from caproute.core.codec import stable_sha256


@dataclass(frozen=True)
class ReplayResult:
    ok: bool
    error: Optional[str] = None
    events: int = 0
    session_id: Optional[str] = None
    routed: int = 0
    unmatched: int = 0
    replay_state_hash: Optional[str] = None


def replay_audit_log(path: Path) -> ReplayResult:
    ok, err = verify_audit_log(path)
    if not ok:
        return ReplayResult(ok=False, error=f"audit verification failed: {err}")

    lines = [ln for ln in path.read_text(encoding="utf-8").splitlines() if ln.strip()]
    if not lines:
        return ReplayResult(ok=False, error="empty audit log")

    # Deterministic derived state: hash over (prev_state_hash + event_hash + type)
    state_hash = "GENESIS"

    first = json.loads(lines[0])
    session_id = first.get("session_id")
    if not session_id:
        return ReplayResult(ok=False, error="missing session_id on first event")

    seen_end = False
    routed = 0
    unmatched = 0

    for i, ln in enumerate(lines, start=1):
        ev = json.loads(ln)
        if ev.get("session_id") != session_id:
            return ReplayResult(ok=False, error=f"mixed session_id at line {i}")

        etype = ev.get("type")
        ehash = ev.get("hash")
        if not etype or not ehash:
            return ReplayResult(ok=False, error=f"missing type/hash at line {i}")

        if i == 1 and etype != "SessionStarted":
            return ReplayResult(ok=False, error="first event must be SessionStarted")
        if seen_end:
            return ReplayResult(ok=False, error="events after SessionClosed")

        if etype == "SessionClosed":
            seen_end = True
        elif etype == "RequestRouted":
            routed += 1
        elif etype == "NoMatchingModel":
            unmatched += 1

        state_hash = stable_sha256({"prev": state_hash, "event_hash": ehash, "type": etype})

    # An open session (no SessionClosed yet) is still a valid log.
    return ReplayResult(
        ok=True,
        events=len(lines),
        session_id=session_id,
        routed=routed,
        unmatched=unmatched,
        replay_state_hash=state_hash,
    )
