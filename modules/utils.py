"""Utility helpers kept dependency-free.

- init_logging: configure console + file logging with run-id.
- status_pass/status_warn/status_fail: concise console status lines (with run-id).
- printable: console-safe text for paths holding non UTF-8 bytes.
- run_capture: thin wrapper over subprocess.run with capture, timeout and timing.
- log: debug-level logger for normal status lines (file-oriented).
"""

from __future__ import annotations

import logging
import os
import subprocess
import time
import uuid
from logging.handlers import RotatingFileHandler
from typing import List, Tuple

from config import CMD_TIMEOUT, LOG_DIR


_RUN_ID = ""


def _gen_run_id() -> str:
    return uuid.uuid4().hex[:8]


def init_logging(run_id: str | None = None) -> str:
    """Initialize logging with console + rotating file handlers.

    - Console: minimal, CRITICAL only; status lines are printed instead.
    - File: DEBUG+, rich format, written to LOG_DIR/oderland-<rid>.log
    Returns the run-id used.
    """
    global _RUN_ID
    if _RUN_ID:
        return _RUN_ID

    rid = run_id or os.environ.get("ODERLAND_RID") or _gen_run_id()
    _RUN_ID = rid

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    try:
        os.makedirs(LOG_DIR, exist_ok=True)
        logfile = os.path.join(LOG_DIR, f"oderland-{rid}.log")
    except OSError:
        logfile = os.path.abspath(f"oderland-{rid}.log")

    # Quiet any pre-existing console handlers
    for h in list(root.handlers):
        if isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler):
            h.setLevel(logging.CRITICAL)

    has_file = any(
        isinstance(h, RotatingFileHandler)
        and getattr(h, "baseFilename", "").endswith(os.path.basename(logfile))
        for h in root.handlers
    )
    if not has_file:
        fh = RotatingFileHandler(
            logfile,
            maxBytes=5 * 1024 * 1024,
            backupCount=3,
            encoding="utf-8",
            errors="backslashreplace",
        )
        fh.setLevel(logging.DEBUG)
        ffmt = logging.Formatter(
            fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
        fh.setFormatter(ffmt)
        root.addHandler(fh)

    # Add a super-quiet console handler if none exist
    if not any(isinstance(h, logging.StreamHandler) for h in root.handlers):
        ch = logging.StreamHandler()
        ch.setLevel(logging.CRITICAL)
        ch.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
        root.addHandler(ch)

    logging.debug("Logging initialized. run_id=%s file=%s", rid, logfile)
    os.environ["ODERLAND_RID"] = rid
    return rid


def _rid() -> str:
    return _RUN_ID or os.environ.get("ODERLAND_RID", "--------")


def printable(text: str) -> str:
    """Render surrogate-escaped filesystem names (non UTF-8 bytes) as U+FFFD."""
    try:
        raw = text.encode("utf-8", "surrogateescape")
    except UnicodeEncodeError:
        raw = text.encode("utf-8", "surrogatepass")
    return raw.decode("utf-8", "replace")


def status_pass(msg: str) -> None:
    print(printable(f"PASS: {msg} [{_rid()}]"))


def status_warn(msg: str) -> None:
    logging.warning(msg)
    print(printable(f"WARN: {msg} [{_rid()}]"))


def status_fail(msg: str) -> None:
    print(printable(f"FAIL: {msg} [{_rid()}]"), flush=True)


def log(msg: str) -> None:
    # File-oriented normal progress; stays out of console noise.
    logging.debug(msg)


def run_capture(
    args: List[str], timeout: int = CMD_TIMEOUT, display: str | None = None
) -> Tuple[bool, str, str, int]:
    """Run a command without a shell and return (ok, stdout, stderr, exit code).

    A timeout or a missing binary is reported as a failed run, never raised.
    `display` replaces the argv in log lines (used to mask secrets).
    """
    display = display or " ".join(args)
    t0 = time.monotonic()
    try:
        proc = subprocess.run(
            args,
            text=True,
            capture_output=True,
            timeout=timeout,
            encoding="utf-8",
            errors="replace",
        )
    except subprocess.TimeoutExpired:
        dt = time.monotonic() - t0
        logging.error("%s timeout after %.1fs", display, dt)
        return False, "", f"timeout after {dt:.1f}s", 124
    except OSError as err:
        logging.error("%s could not start: %s", display, err)
        return False, "", str(err), 127

    dt = time.monotonic() - t0
    ok = proc.returncode == 0
    if ok:
        log(f"PASS: {display} ({dt:.1f}s)")
    else:
        logging.error(
            "%s exit=%s\nSTDERR: %s", display, proc.returncode, (proc.stderr or "").strip()
        )
    return ok, (proc.stdout or ""), (proc.stderr or ""), proc.returncode
