"""
Verification engine for HumanGate.

A single verify() call takes whatever the browser sent and decides, based on
which fields are present, whether to accept the client, hand out a text
challenge, or reject a challenge answer.

Routing precedence:
  1. challengeToken AND captchaInput      → text verification
  2. mousePath AND interactionTime        → behavioral scoring
  3. anything else                        → issue a fresh challenge
"""

import logging
import math
import numbers
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from captcha_utils import generate_captcha, hash_captcha, verify_captcha
from challenge_store import ChallengeStore
from config import Config
from keystroke_utils import analyze_keystrokes
from trust_scorer import calculate_human_score

log = logging.getLogger(__name__)

# Routes
TEXT_VERIFY_FLOW = "text_verify"
BEHAVIORAL_FLOW = "behavioral"
ISSUE_FLOW = "issue"

# Rejection reasons
INVALID_OR_EXPIRED_TOKEN = "invalid_or_expired_token"
CHALLENGE_MISMATCH = "challenge_mismatch"
CAPTCHA_REQUIRED = "captcha_required"

PASS_MARKER = b"captcha_verified"


# ── Outcomes ──────────────────────────────────────────────

@dataclass(frozen=True)
class Accepted:
    def to_dict(self) -> Dict[str, Any]:
        return {"accepted": True}


@dataclass(frozen=True)
class ChallengeIssued:
    token: str
    rendered_text: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "accepted": False,
            "challenge": {"token": self.token, "renderedText": self.rendered_text},
        }


@dataclass(frozen=True)
class Rejected:
    reason: str

    def to_dict(self) -> Dict[str, Any]:
        return {"accepted": False, "error": self.reason}


# ── Request parsing ───────────────────────────────────────

def _is_number(value):
    if not isinstance(value, numbers.Real) or isinstance(value, bool):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        return False


def _parse_samples(raw, fields):
    """Keep only mappings whose listed fields are all numbers."""
    if not isinstance(raw, (list, tuple)):
        return None
    samples = []
    for item in raw:
        if isinstance(item, dict) and all(_is_number(item.get(f)) for f in fields):
            # Floats saturate to inf instead of overflowing in later arithmetic
            samples.append({f: float(item[f]) for f in fields})
    return samples


def _parse_text(raw):
    if isinstance(raw, str) and raw:
        return raw
    return None


@dataclass
class VerificationRequest:
    mouse_path: Optional[List[Dict[str, float]]] = None
    interaction_time: Optional[float] = None
    challenge_token: Optional[str] = None
    captcha_input: Optional[str] = None
    key_events: List[Dict[str, float]] = field(default_factory=list)

    @classmethod
    def from_payload(cls, payload):
        """Build a request from a decoded JSON body; unusable fields count as absent."""
        if not isinstance(payload, dict):
            return cls()
        interaction_time = payload.get("interactionTime")
        if _is_number(interaction_time) and interaction_time >= 0:
            interaction_time = float(interaction_time)
        else:
            interaction_time = None
        return cls(
            mouse_path=_parse_samples(payload.get("mousePath"), ("x", "y", "t")),
            interaction_time=interaction_time,
            challenge_token=_parse_text(payload.get("challengeToken")),
            captcha_input=_parse_text(payload.get("captchaInput")),
            key_events=_parse_samples(payload.get("keyEvents"), ("t",)) or [],
        )


def route_request(req):
    if req.challenge_token is not None and req.captcha_input is not None:
        return TEXT_VERIFY_FLOW
    if req.mouse_path is not None and req.interaction_time is not None:
        return BEHAVIORAL_FLOW
    return ISSUE_FLOW


# ── Engine ────────────────────────────────────────────────

class VerificationEngine:
    def __init__(
        self,
        store: Optional[ChallengeStore] = None,
        ttl_seconds: float = Config.CHALLENGE_TTL_SECONDS,
        bcrypt_rounds: int = Config.BCRYPT_ROUNDS,
        accept_threshold: int = Config.ACCEPT_THRESHOLD,
        keystroke_default: bool = Config.KEYSTROKE_INSUFFICIENT_DEFAULT,
        pass_store: Optional[ChallengeStore] = None,
        pass_ttl_seconds: float = Config.SESSION_TIMEOUT_MINUTES * 60,
    ) -> None:
        self.store = store if store is not None else ChallengeStore()
        self.pass_store = pass_store if pass_store is not None else ChallengeStore()
        self.pass_ttl_seconds = pass_ttl_seconds
        self.ttl_seconds = ttl_seconds
        self.bcrypt_rounds = bcrypt_rounds
        self.accept_threshold = accept_threshold
        self.keystroke_default = keystroke_default

    def verify(self, payload, caller=None):
        """Decide the outcome for one request. Never raises on bad input."""
        req = VerificationRequest.from_payload(payload)
        flow = route_request(req)
        log.info("[CAPTCHA] %s request from %s", flow, caller or "anonymous")

        if flow == TEXT_VERIFY_FLOW:
            return self._verify_text(req)
        if flow == BEHAVIORAL_FLOW:
            return self._verify_behavior(req)
        return self.issue_challenge()

    def issue_challenge(self):
        text = generate_captcha()
        secret_hash = hash_captcha(text, rounds=self.bcrypt_rounds)
        token = self.store.issue(secret_hash, self.ttl_seconds)
        return ChallengeIssued(token=token, rendered_text=text)

    def grant_pass(self):
        """Record a passed check server-side and return its single-use token."""
        return self.pass_store.issue(PASS_MARKER, self.pass_ttl_seconds)

    def redeem_pass(self, token):
        return self.pass_store.consume(token) is not None

    def _verify_behavior(self, req):
        score = calculate_human_score(req.mouse_path, req.interaction_time)
        log.info("[CAPTCHA] Human score %d (threshold %d)", score, self.accept_threshold)
        if score > self.accept_threshold:
            return Accepted()
        return self.issue_challenge()

    def _verify_text(self, req):
        secret_hash = self.store.consume(req.challenge_token)
        if secret_hash is None:
            log.info("[CAPTCHA] Unknown, used or expired challenge token")
            return Rejected(INVALID_OR_EXPIRED_TOKEN)

        text_ok = verify_captcha(req.captcha_input, secret_hash)
        typing_ok = analyze_keystrokes(req.key_events, self.keystroke_default)
        if text_ok and typing_ok:
            return Accepted()

        log.info("[CAPTCHA] Challenge failed (text_ok=%s, typing_ok=%s)", text_ok, typing_ok)
        return Rejected(CHALLENGE_MISMATCH)
