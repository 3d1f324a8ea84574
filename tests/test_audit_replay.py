"""Tests for session audit log replay.
"""

from pathlib import Path

from caproute.core.audit import AuditWriter, replay_audit_log


def test_replay_passes(tmp_path: Path):
    log = tmp_path / "runtime" / "logs" / "session.jsonl"
    w = AuditWriter(log)
    w.append("s1", "SessionStarted", {"x": "y"})
    w.append("s1", "RequestRouted", {"model": "m"})
    w.append("s1", "SessionClosed", {"messages": 2})
    res = replay_audit_log(log)
    assert res.ok is True
    assert res.events == 3
    assert res.routed == 1
    assert res.replay_state_hash is not None


def test_replay_fails_on_order_change(tmp_path: Path):
    log = tmp_path / "runtime" / "logs" / "session.jsonl"
    w = AuditWriter(log)
    w.append("s1", "SessionStarted", {"x": "y"})
    w.append("s1", "RequestRouted", {"model": "m"})
    w.append("s1", "SessionClosed", {"messages": 2})

    lines = log.read_text(encoding="utf-8").splitlines()
    lines[1], lines[2] = lines[2], lines[1]
    log.write_text("\n".join(lines) + "\n", encoding="utf-8")

    res = replay_audit_log(log)
    assert res.ok is False


def test_replay_requires_session_start(tmp_path: Path):
    log = tmp_path / "session.jsonl"
    w = AuditWriter(log)
    w.append("s1", "ModelRegistered", {"name": "m"})
    res = replay_audit_log(log)
    assert res.ok is False
    assert "SessionStarted" in (res.error or "")
