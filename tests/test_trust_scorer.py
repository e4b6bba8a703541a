"""
Unit tests for trust scorer: timing short-circuit, degraded path, geometry terms.
"""

from __future__ import annotations

import math

import pytest

from trust_scorer import calculate_human_score


def _arc_path(samples: int = 50, radius: float = 200.0) -> list[dict]:
    """Half circle with alternating fast/slow segments."""
    path = []
    t = 0
    for i in range(samples):
        angle = math.pi * i / (samples - 1)
        path.append({"x": radius * math.cos(angle), "y": radius * math.sin(angle), "t": t})
        t += 15 if i % 2 == 0 else 80
    return path


def _straight_path(samples: int, step_ms: int = 20) -> list[dict]:
    return [{"x": float(i * 5), "y": 0.0, "t": i * step_ms} for i in range(samples)]


@pytest.mark.parametrize("interaction_time", [0, 200, 499])
def test_fast_interaction_scores_zero(interaction_time):
    assert calculate_human_score(_arc_path(), interaction_time) == 0


def test_missing_interaction_time_scores_zero():
    assert calculate_human_score(_arc_path(), None) == 0


@pytest.mark.parametrize("samples", [0, 1, 14])
def test_short_path_uses_timing_only(samples):
    path = _arc_path()[:samples]
    assert calculate_human_score(path, 2000) == 30
    assert calculate_human_score(path, 1000) == 0


def test_none_path_uses_timing_only():
    assert calculate_human_score(None, 1600) == 30


def test_rich_curved_uneven_path_scores_full():
    assert calculate_human_score(_arc_path(), 2000) == 100


def test_straight_uniform_path_gets_only_sample_bonus():
    # 50 evenly spaced samples: complexity 1, no speed variance
    assert calculate_human_score(_straight_path(50), 2000) == 50


def test_exactly_forty_samples_gets_no_sample_bonus():
    assert calculate_human_score(_straight_path(40), 2000) == 30


def test_closed_loop_uses_unit_divisor():
    path = _arc_path(samples=30)
    path.append({"x": path[0]["x"], "y": path[0]["y"], "t": path[-1]["t"] + 50})
    # Start equals end, so complexity is the raw path length
    assert calculate_human_score(path, 1000) >= 20


def test_sub_ten_ms_intervals_ignored_for_velocity():
    # Alternating 5ms/20ms intervals: only the 20ms pairs form velocities, all equal
    path = []
    t = 0
    for i in range(20):
        path.append({"x": float(i * 10), "y": 0.0, "t": t})
        t += 5 if i % 2 == 0 else 20
    assert calculate_human_score(path, 1000) == 0


def test_score_is_pure():
    path = _arc_path()
    snapshot = [dict(p) for p in path]
    first = calculate_human_score(path, 1800)
    second = calculate_human_score(path, 1800)
    assert first == second
    assert path == snapshot
