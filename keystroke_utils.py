"""
Keystroke timing analysis for HumanGate.
Only the spacing between key presses is inspected, never the keys themselves.
"""

import logging

log = logging.getLogger(__name__)

MIN_EVENTS = 5
MIN_AVERAGE_DELAY_MS = 50
FAST_STROKE_MS = 40


def analyze_keystrokes(events, insufficient_default=False):
    """Return True when the typing rhythm looks human."""
    if not events or len(events) < MIN_EVENTS:
        log.debug("[KEYSTROKE] Only %d key events, using default verdict", len(events or []))
        return insufficient_default

    delays = [cur["t"] - prev["t"] for prev, cur in zip(events, events[1:])]
    average_delay = sum(delays) / len(delays)
    too_fast = sum(1 for d in delays if d < FAST_STROKE_MS)

    log.debug("[KEYSTROKE] avg_delay=%.2fms fast_strokes=%d/%d", average_delay, too_fast, len(delays))

    if average_delay < MIN_AVERAGE_DELAY_MS or too_fast > len(delays) / 2:
        log.info("[KEYSTROKE] Typing pattern rejected as automated")
        return False
    return True
