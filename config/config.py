import os


def _optional_int(name: str):
    raw = os.getenv(name, "").strip()
    return int(raw) if raw else None


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY") or "attendance-dashboard-secret"
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

    # Expected headcount for days whose records carry no member list; unset means unknown.
    DEFAULT_EXPECTED = _optional_int("DEFAULT_EXPECTED")
    EARLY_ARRIVAL_LIMIT = int(os.environ.get("EARLY_ARRIVAL_LIMIT", "3"))
    ANALYTICS_DAYS = int(os.environ.get("ANALYTICS_DAYS", "30"))


SECRET_KEY = Config.SECRET_KEY
LOG_LEVEL = Config.LOG_LEVEL
DEFAULT_EXPECTED = Config.DEFAULT_EXPECTED
EARLY_ARRIVAL_LIMIT = Config.EARLY_ARRIVAL_LIMIT
ANALYTICS_DAYS = Config.ANALYTICS_DAYS

DEBUG = bool(int(os.environ.get("DEBUG", "1")))
