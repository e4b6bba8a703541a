"""
Pytest fixtures for HumanGate tests. Uses a controllable clock and cheap bcrypt rounds.
"""

from __future__ import annotations

import pytest

from challenge_store import ChallengeStore
from verification import VerificationEngine


class FakeClock:
    def __init__(self, start: float = 1_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    return ChallengeStore(clock=clock)


@pytest.fixture
def engine(store, clock):
    """Engine with the minimum bcrypt cost so tests stay fast."""
    return VerificationEngine(
        store=store,
        ttl_seconds=120,
        bcrypt_rounds=4,
        pass_store=ChallengeStore(clock=clock),
        pass_ttl_seconds=600,
    )


@pytest.fixture
def client(engine, monkeypatch):
    """Flask TestClient wired to the test engine."""
    import captcha_routes
    from app import app

    app.config["TESTING"] = True
    monkeypatch.setattr(captcha_routes, "_engine", engine)
    return app.test_client()
