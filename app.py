"""
HumanGate — Main Application
"""

import logging

from flask import Flask, jsonify
from config import Config
from captcha_routes import captcha_bp

logging.basicConfig(
    level=getattr(logging, Config.LOG_LEVEL, logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = Flask(__name__)
app.secret_key = Config.SECRET_KEY
app.config["SESSION_COOKIE_HTTPONLY"] = True
app.config["SESSION_COOKIE_SAMESITE"] = "Lax"
app.config["PERMANENT_SESSION_LIFETIME"] = Config.SESSION_TIMEOUT_MINUTES * 60

# Register blueprints
app.register_blueprint(captcha_bp)


# ── Error Handlers ────────────────────────────────────────

@app.errorhandler(404)
def not_found(e):
    return jsonify({"error": "not_found"}), 404


@app.errorhandler(500)
def server_error(e):
    app.logger.error("[CAPTCHA] Server error during verification: %s", e)
    return jsonify({"error": "internal_error", "message": "Server error during verification."}), 500


if __name__ == "__main__":
    app.run(debug=True, host="0.0.0.0", port=5000)
