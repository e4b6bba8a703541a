"""
Trust scorer for HumanGate.
Turns a recorded pointer path and the interaction time into a human-likelihood score.

  0     : action faster than human reaction time (< 500 ms)
  +30   : deliberate interaction (> 1500 ms)
  +20   : curved path (complexity > 1.2)
  +20   : rich path (more than 40 samples)
  +30   : uneven speed (velocity variance > 0.05)
"""

import logging
import math

log = logging.getLogger(__name__)

MIN_HUMAN_REACTION_MS = 500
DELIBERATION_MS = 1500
MIN_PATH_SAMPLES = 15
RICH_PATH_SAMPLES = 40
NOISE_INTERVAL_MS = 10
COMPLEXITY_THRESHOLD = 1.2
VARIANCE_THRESHOLD = 0.05


def _distance(p1, p2):
    return math.hypot(p2["x"] - p1["x"], p2["y"] - p1["y"])


def _path_stats(path):
    """Return (total_distance, velocities) over consecutive sample pairs."""
    total_distance = 0.0
    velocities = []
    for p1, p2 in zip(path, path[1:]):
        distance = _distance(p1, p2)
        total_distance += distance
        elapsed = p2["t"] - p1["t"]
        # Sub-10ms intervals are measurement noise
        if elapsed > NOISE_INTERVAL_MS:
            velocities.append(distance / elapsed)
    return total_distance, velocities


def _variance(values):
    if not values:
        return 0.0
    mean = sum(values) / len(values)
    return sum((v - mean) * (v - mean) for v in values) / len(values)


def calculate_human_score(path, interaction_time):
    """Return an integer score; higher means more human-like."""
    if interaction_time is None or interaction_time < MIN_HUMAN_REACTION_MS:
        return 0

    score = 0
    if interaction_time > DELIBERATION_MS:
        score += 30

    if not path or len(path) < MIN_PATH_SAMPLES:
        log.debug("[SCORE] Not enough pointer data (%d samples), timing only", len(path or []))
        return score

    total_distance, velocities = _path_stats(path)
    straight_line = _distance(path[0], path[-1])
    complexity = total_distance / (straight_line or 1)
    velocity_variance = _variance(velocities)

    log.debug(
        "[SCORE] complexity=%.2f velocity_variance=%.4f samples=%d",
        complexity, velocity_variance, len(path),
    )

    if complexity > COMPLEXITY_THRESHOLD:
        score += 20
    if len(path) > RICH_PATH_SAMPLES:
        score += 20
    if velocity_variance > VARIANCE_THRESHOLD:
        score += 30
    return score
