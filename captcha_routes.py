"""
CAPTCHA routes for HumanGate
Thin HTTP layer over the verification engine plus a login endpoint gated on a passed check.
"""

from functools import wraps

from flask import Blueprint, request, session, jsonify

from verification import VerificationEngine, Accepted, Rejected, CAPTCHA_REQUIRED

captcha_bp = Blueprint("captcha", __name__)

_engine = None


def get_engine():
    global _engine
    if _engine is None:
        _engine = VerificationEngine()
    return _engine


# ── Helpers ───────────────────────────────────────────────

def captcha_required(f):
    @wraps(f)
    def decorated(*args, **kwargs):
        # The pass lives server-side; replaying an old cookie finds it already spent
        token = session.pop("captcha_pass", None)
        if not token or not get_engine().redeem_pass(token):
            return jsonify(Rejected(CAPTCHA_REQUIRED).to_dict()), 403
        return f(*args, **kwargs)
    return decorated


def _get_caller():
    return request.remote_addr or "127.0.0.1"


# ── API: Verify ───────────────────────────────────────────

@captcha_bp.route("/api/captcha/verify", methods=["POST"])
def api_verify():
    payload = request.get_json(silent=True) or {}
    engine = get_engine()
    outcome = engine.verify(payload, caller=_get_caller())

    if isinstance(outcome, Accepted):
        session["captcha_pass"] = engine.grant_pass()
        return jsonify(outcome.to_dict())
    if isinstance(outcome, Rejected):
        return jsonify(outcome.to_dict()), 401
    return jsonify(outcome.to_dict())


# ── API: CAPTCHA Refresh ─────────────────────────────────

@captcha_bp.route("/api/captcha", methods=["GET"])
def api_captcha():
    return jsonify(get_engine().issue_challenge().to_dict())


# ── API: Login ────────────────────────────────────────────

@captcha_bp.route("/api/login", methods=["POST"])
@captcha_required
def api_login():
    return jsonify({"success": True, "message": "Login successful!"})
