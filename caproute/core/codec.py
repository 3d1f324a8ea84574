"""
Canonical JSON encoding and stable hashing for audit records.
"""

from __future__ import annotations

import json
import hashlib
from dataclasses import asdict, is_dataclass
from enum import Enum
from typing import Any

def canonicalize(obj: Any) -> Any:
    if is_dataclass(obj):
        return canonicalize(asdict(obj))
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, dict):
        return {str(k): canonicalize(obj[k]) for k in sorted(obj.keys(), key=str)}
    if isinstance(obj, (set, frozenset)):
        return sorted(canonicalize(x) for x in obj)
    if isinstance(obj, (list, tuple)):
        return [canonicalize(x) for x in obj]
    return obj

def canonical_json_bytes(obj: Any) -> bytes:
    canon = canonicalize(obj)
    s = json.dumps(canon, separators=(",", ":"), ensure_ascii=False)
    return s.encode("utf-8")

def stable_sha256(obj: Any) -> str:
    return hashlib.sha256(canonical_json_bytes(obj)).hexdigest()
