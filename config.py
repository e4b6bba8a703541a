import os
from dotenv import load_dotenv

load_dotenv()


def _env_bool(name, default):
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "humangate-super-secret-key-change-me")

    # Challenge lifetime and hashing cost
    CHALLENGE_TTL_SECONDS = int(os.getenv("CHALLENGE_TTL_SECONDS", 120))
    CHALLENGE_LENGTH = 6
    BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", 10))

    # Behavioral policy
    ACCEPT_THRESHOLD = int(os.getenv("ACCEPT_THRESHOLD", 50))

    # Verdict when fewer than 5 key events were recorded
    KEYSTROKE_INSUFFICIENT_DEFAULT = _env_bool("KEYSTROKE_INSUFFICIENT_DEFAULT", False)

    # Session
    SESSION_TIMEOUT_MINUTES = int(os.getenv("SESSION_TIMEOUT_MINUTES", 10))

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
