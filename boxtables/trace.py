"""Opt-in trace file for table formatting diagnostics.

Set BOXTABLES_TRACE_LOG to a file path to get one timestamped line per
notable event: rejected table blocks, internal formatting failures and
formatters joining a pipeline. When the variable is unset or empty,
nothing is written and no file is touched.

    BOXTABLES_TRACE_LOG=/tmp/tables.log python my_app.py
"""

import os
import traceback
from datetime import datetime
from typing import Optional

TRACE_ENV_VAR = "BOXTABLES_TRACE_LOG"


def trace_path() -> Optional[str]:
    """Configured trace file, or None when tracing is off."""
    return os.environ.get(TRACE_ENV_VAR) or None


def append_trace(
    path: str,
    component: str,
    msg: str,
    *,
    include_traceback: bool = False,
) -> None:
    """Append one ``[time] [component] msg`` line to ``path``.

    An unwritable trace file is ignored; tracing must never change what
    the formatter returns.
    """
    stamp = datetime.now().strftime("%H:%M:%S.%f")[:-3]
    entry = f"[{stamp}] [{component}] {msg}\n"
    if include_traceback:
        tb = traceback.format_exc()
        if tb.strip() != "NoneType: None":
            entry += tb

    try:
        parent = os.path.dirname(os.path.abspath(path))
        os.makedirs(parent, exist_ok=True)
        with open(path, "a", encoding="utf-8") as f:
            f.write(entry)
    except OSError:
        pass


def trace(component: str, msg: str, *, include_traceback: bool = False) -> None:
    """Record ``msg`` for ``component`` if BOXTABLES_TRACE_LOG is set."""
    path = trace_path()
    if path is None:
        return
    append_trace(path, component, msg, include_traceback=include_traceback)
