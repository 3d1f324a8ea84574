"""
Command line chat driver.

  python -m apps.chat.main -m "/generate a fibonacci function" -m "/help"
  echo "fix my bug" | python -m apps.chat.main
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from pathlib import Path
from typing import List, Optional

from caproute.core.settings import Settings

from apps.chat.session import open_session


def main(argv: Optional[List[str]] = None) -> int:
    env = Settings.from_env()

    ap = argparse.ArgumentParser()
    ap.add_argument("--models", default=str(env.models_path), help="path to models.yaml")
    ap.add_argument("--runtime", default=str(env.runtime_root), help="runtime directory")
    ap.add_argument("--audit", action="store_true", default=env.audit_enabled, help="write a session audit log")
    ap.add_argument("-m", "--message", action="append", default=[], help="message to send (repeatable)")
    ap.add_argument("--log-level", default=env.log_level, help="logging level")
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    settings = dataclasses.replace(
        env,
        models_path=Path(args.models),
        runtime_root=Path(args.runtime),
        audit_enabled=bool(args.audit),
    )
    session = open_session(settings)

    messages = args.message or [ln for ln in (line.rstrip("\n") for line in sys.stdin) if ln.strip()]
    failed = 0
    try:
        for text in messages:
            reply = session.send_message(text)
            print(f"User: {text}")
            print(f"{reply.sender}: {reply.content}")
            if reply.content.startswith("Error:"):
                failed += 1
    finally:
        session.close()

    return 0 if failed == 0 else 1


if __name__ == "__main__":
    raise SystemExit(main())
