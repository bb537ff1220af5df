#!/usr/bin/env python3
"""Fake CLI executable for bridge verification.

Purpose:
- Provide a deterministic child process to test the bridge without a compiled binary.

Behavior is selected by argv[1] (the bridge itself never passes arguments; tests
wrap this script in a small shell script that does):

- cli (default): reads a JSON object on stdin and answers like the real CLI
    - {"ping": true} -> {"ok": true, "input": ..., "response": "Pong! ...", "pong": true}
    - {"message": "x"} -> {"ok": true, "input": ..., "response": "Echo: x", "pong": null}
    - invalid JSON -> diagnostic on stderr, exit 1
- alive: {"ping": true} -> {"alive":true}; anything else -> "parse error" on stderr, exit 1
- cat: copies stdin to stdout byte for byte
- fail: reads stdin, writes on both streams, exits 3
- flood-stderr: writes 10 MB on stderr BEFORE reading stdin, then prints the stdin size
- no-read: never reads stdin, writes "bye" on stderr, exits 2
- sleep: sleeps for a long time (timeout tests)
- kill-self: reads stdin then kills itself with SIGKILL
"""

from __future__ import annotations

import json
import os
import signal
import sys
import time

FLOOD_BYTES = 10 * 1024 * 1024


def _read_stdin() -> bytes:
    return sys.stdin.buffer.read()


def _write_stdout(data: bytes) -> None:
    sys.stdout.buffer.write(data)
    sys.stdout.buffer.flush()


def _write_stderr(data: bytes) -> None:
    sys.stderr.buffer.write(data)
    sys.stderr.buffer.flush()


def _mode_cli() -> int:
    raw = _read_stdin().decode("utf-8")
    try:
        value = json.loads(raw) if raw.strip() else {}
    except json.JSONDecodeError as e:
        _write_stderr(f"Error: {e}\n".encode("utf-8"))
        return 1
    if not isinstance(value, dict):
        _write_stderr(b"Error: invalid type, expected struct InputPayload\n")
        return 1

    output: dict[str, object] = {"ok": True, "input": value, "response": None, "pong": None}
    if value.get("ping") is True:
        output["pong"] = True
        output["response"] = f"Pong! Rust binary is alive. Received at: {value.get('timestamp') or 'unknown'}"
    elif isinstance(value.get("message"), str):
        output["response"] = f"Echo: {value['message']}"
    else:
        output["response"] = "No specific message provided"

    _write_stdout((json.dumps(output) + "\n").encode("utf-8"))
    return 0


def _mode_alive() -> int:
    raw = _read_stdin()
    try:
        value = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError):
        value = None
    if isinstance(value, dict) and value.get("ping") is True:
        _write_stdout(b'{"alive":true}')
        return 0
    _write_stderr(b"parse error")
    return 1


def _mode_cat() -> int:
    _write_stdout(_read_stdin())
    return 0


def _mode_fail() -> int:
    _read_stdin()
    _write_stdout(b"partial output")
    _write_stderr(b"something went wrong")
    return 3


def _mode_flood_stderr() -> int:
    block = b"e" * 65536
    for _ in range(FLOOD_BYTES // len(block)):
        sys.stderr.buffer.write(block)
    sys.stderr.buffer.flush()
    data = _read_stdin()
    _write_stdout(str(len(data)).encode("ascii"))
    return 0


def _mode_no_read() -> int:
    _write_stderr(b"bye")
    return 2


def _mode_sleep() -> int:
    time.sleep(300)
    return 0


def _mode_kill_self() -> int:
    _read_stdin()
    os.kill(os.getpid(), signal.SIGKILL)
    return 0


MODES = {
    "cli": _mode_cli,
    "alive": _mode_alive,
    "cat": _mode_cat,
    "fail": _mode_fail,
    "flood-stderr": _mode_flood_stderr,
    "no-read": _mode_no_read,
    "sleep": _mode_sleep,
    "kill-self": _mode_kill_self,
}


def main() -> int:
    mode = sys.argv[1] if len(sys.argv) > 1 else "cli"
    return MODES[mode]()


if __name__ == "__main__":
    raise SystemExit(main())
