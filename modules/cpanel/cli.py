# cli.py
# Invariants:
# - All control-panel access goes through these wrappers; callers never build argv.
# - Every call asks for --output=json and is parsed strictly; anything that is
#   not the documented envelope raises ExternalApiError.
# - UAPI success is result.status == 1, errors in result.errors.
# - cPanel API 2 success is cpanelresult.data[0].result == 1, error in
#   cpanelresult.error.
# - Secrets (password=) never reach the log files.

from __future__ import annotations

import json
import logging
from typing import Any
from urllib.parse import quote_plus

from config import CMD_TIMEOUT, CPAPI2_PATH, UAPI_PATH
from modules.errors import ExternalApiError
from modules.utils import run_capture

SECRET_KEYS = ("password",)


def _kv_args(params: dict[str, Any], encode: bool = False) -> list[str]:
    parts: list[str] = []
    for key, value in params.items():
        if value is None:
            continue
        text = str(value)
        if encode:
            text = quote_plus(text)
        parts.append(f"{key}={text}")
    return parts


def _fmt_cmd_for_log(args: list[str]) -> str:
    shown: list[str] = []
    for arg in args:
        key = arg.split("=", 1)[0]
        if "=" in arg and key in SECRET_KEYS:
            shown.append(f"{key}=****")
            continue
        shown.append(arg)
    return " ".join(shown)


def _decode(output: str, label: str) -> dict[str, Any]:
    try:
        data = json.loads(output)
    except (json.JSONDecodeError, TypeError) as err:
        raise ExternalApiError(f"{label}: could not decode json output: {err}") from err
    if not isinstance(data, dict):
        raise ExternalApiError(f"{label}: unexpected output type {type(data).__name__}")
    return data


def _run(binary: str, module: str, function: str, kv: list[str], timeout: int) -> str:
    args = [binary, module, function] + kv + ["--output=json"]
    label = f"{module}::{function}"
    ok, out, err, code = run_capture(args, timeout=timeout, display=_fmt_cmd_for_log(args))
    # uapi reports API failures in the JSON envelope and may still exit 0;
    # an empty stdout with a non-zero exit is a process failure.
    if not ok and not out.strip():
        raise ExternalApiError(f"{label}: exit={code} {err.strip()}".rstrip())
    return out


def parse_uapi_output(output: str, label: str = "uapi") -> Any:
    data = _decode(output, label)
    result = data.get("result")
    if not isinstance(result, dict):
        raise ExternalApiError(f"{label}: missing result in output")
    if result.get("status") != 1:
        errors = result.get("errors") or ["unknown error"]
        if not isinstance(errors, list):
            errors = [str(errors)]
        raise ExternalApiError(f"{label}: " + "\n".join(str(e) for e in errors))
    return result.get("data")


def parse_cpapi2_output(output: str, label: str = "cpapi2") -> Any:
    data = _decode(output, label)
    envelope = data.get("cpanelresult")
    if not isinstance(envelope, dict):
        raise ExternalApiError(f"{label}: missing cpanelresult in output")
    rows = envelope.get("data")
    first = rows[0] if isinstance(rows, list) and rows else None
    if not isinstance(first, dict) or first.get("result") != 1:
        raise ExternalApiError(f"{label}: {envelope.get('error') or 'unknown error'}")
    return rows


def uapi(module: str, function: str, timeout: int = CMD_TIMEOUT, **params: Any) -> Any:
    """Call a UAPI function and return result.data."""
    label = f"{module}::{function}"
    out = _run(UAPI_PATH, module, function, _kv_args(params), timeout)
    data = parse_uapi_output(out, label)
    logging.debug("uapi %s: parsed type=%s", label, type(data).__name__)
    return data


def cpapi2(module: str, function: str, timeout: int = CMD_TIMEOUT, **params: Any) -> Any:
    """Call a cPanel API 2 function and return cpanelresult.data.

    Values are URL-encoded the way the cpapi2 command line expects them.
    """
    label = f"{module}::{function}"
    out = _run(CPAPI2_PATH, module, function, _kv_args(params, encode=True), timeout)
    return parse_cpapi2_output(out, label)
