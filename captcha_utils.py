"""
Text CAPTCHA helpers for HumanGate.
The secret is hashed with bcrypt so the store never holds the plain text.
"""

import secrets
import string

import bcrypt

from config import Config

CAPTCHA_ALPHABET = string.ascii_uppercase + string.digits


def generate_captcha(length=Config.CHALLENGE_LENGTH):
    """Return a random uppercase alphanumeric challenge text."""
    return "".join(secrets.choice(CAPTCHA_ALPHABET) for _ in range(length))


def hash_captcha(text, rounds=Config.BCRYPT_ROUNDS):
    return bcrypt.hashpw(text.lower().encode(), bcrypt.gensalt(rounds=rounds))


def verify_captcha(provided, hashed):
    """Constant-time check of a typed answer against a stored hash."""
    if not provided or not hashed:
        return False
    try:
        return bcrypt.checkpw(provided.strip().lower().encode(), hashed)
    except ValueError:
        # bcrypt refuses inputs over 72 bytes or a malformed hash
        return False
