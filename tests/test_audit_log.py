"""
Test for audit log verification
"""

from pathlib import Path

from caproute.core.audit import AuditWriter, verify_audit_log, redact_text


def test_audit_appends_and_verifies(tmp_path: Path):
    log = tmp_path / "runtime" / "logs" / "session.jsonl"
    w = AuditWriter(log)
    w.append("s1", "SessionStarted", {"x": "y"})
    w.append("s1", "SessionClosed", {"messages": 0})
    ok, err = verify_audit_log(log)
    assert ok is True
    assert err is None


def test_audit_tamper_detected(tmp_path: Path):
    log = tmp_path / "runtime" / "logs" / "session.jsonl"
    w = AuditWriter(log)
    w.append("s1", "SessionStarted", {"x": "y"})
    w.append("s1", "SessionClosed", {"messages": 0})

    lines = log.read_text(encoding="utf-8").splitlines()
    lines[0] = lines[0].replace('"y"', '"z"')
    log.write_text("\n".join(lines) + "\n", encoding="utf-8")

    ok, err = verify_audit_log(log)
    assert ok is False
    assert err is not None


def test_writer_resumes_chain(tmp_path: Path):
    log = tmp_path / "session.jsonl"
    AuditWriter(log).append("s1", "SessionStarted", {})
    AuditWriter(log).append("s1", "SessionClosed", {})
    ok, err = verify_audit_log(log)
    assert ok is True, err


def test_redact_text():
    assert "sk-" not in redact_text("token sk-" + "a" * 24)
    assert redact_text("plain prompt") == "plain prompt"
