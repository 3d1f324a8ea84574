"""
Hash-chained audit log for registry changes and routing decisions.
"""

from .writer import AuditWriter, verify_audit_log, redact_text
from .replay import replay_audit_log, ReplayResult

__all__ = ['AuditWriter', 'verify_audit_log', 'redact_text', 'replay_audit_log', 'ReplayResult']
