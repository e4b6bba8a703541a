"""
In-memory store for outstanding text challenges.

Each entry maps an opaque token to the bcrypt hash of its secret and an expiry
time. Tokens are single-use: consume() removes the entry whether or not the
caller's answer turns out to be correct.
"""

import logging
import secrets
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

log = logging.getLogger(__name__)

# 24 random bytes -> 192 bits of entropy
TOKEN_BYTES = 24


@dataclass
class ChallengeRecord:
    token: str
    secret_hash: bytes
    created_at: float
    expires_at: float


class ChallengeStore:
    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        self._challenges: Dict[str, ChallengeRecord] = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._challenges)

    def issue(self, secret_hash: bytes, ttl_seconds: float) -> str:
        """Store a hash under a fresh random token and return the token."""
        token = secrets.token_urlsafe(TOKEN_BYTES)
        now = self._clock()
        record = ChallengeRecord(
            token=token,
            secret_hash=secret_hash,
            created_at=now,
            expires_at=now + ttl_seconds,
        )
        with self._lock:
            self._purge_locked(now)
            self._challenges[token] = record
        return token

    def consume(self, token: str) -> Optional[bytes]:
        """Remove the entry for token and return its hash if still live."""
        if not token:
            return None
        with self._lock:
            record = self._challenges.pop(token, None)
        if record is None:
            return None
        if self._clock() >= record.expires_at:
            log.info("[STORE] Challenge presented after expiry")
            return None
        return record.secret_hash

    def purge_expired(self) -> int:
        with self._lock:
            return self._purge_locked(self._clock())

    def _purge_locked(self, now: float) -> int:
        expired = [token for token, record in self._challenges.items() if now >= record.expires_at]
        for token in expired:
            del self._challenges[token]
        if expired:
            log.debug("[STORE] Purged %d expired challenges", len(expired))
        return len(expired)
