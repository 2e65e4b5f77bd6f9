"""Timestamped, optionally throttled flow logging for layout diagnostics."""

import time

from collectionbook.utils.settings import settings, DEFAULT_SETTINGS

_flow_log_last: dict[str, float] = {}


def trace_enabled() -> bool:
    try:
        return bool(settings.value('layout_trace_logs',
                                   defaultValue=DEFAULT_SETTINGS['layout_trace_logs'],
                                   type=bool))
    except Exception:
        return False


def log_flow(component: str, message: str, *, level: str = "DEBUG",
             throttle_key: str | None = None, every_s: float | None = None):
    """Print a flow trace line when `layout_trace_logs` is enabled.

    Args:
        component: Upper-case tag such as LAYOUT, INVALIDATE or DYNAMICS
        message: Free-form text
        level: Severity label shown in the line
        throttle_key: Lines sharing a key are emitted at most once per `every_s`
        every_s: Throttle window in seconds
    """
    if not trace_enabled():
        return

    now = time.time()
    if throttle_key and every_s is not None:
        last = _flow_log_last.get(throttle_key, 0.0)
        if (now - last) < every_s:
            return
        _flow_log_last[throttle_key] = now
    ts = time.strftime("%H:%M:%S", time.localtime(now)) + f".{int((now % 1) * 1000):03d}"
    print(f"[{ts}][TRACE][{component}][{level}] {message}")
