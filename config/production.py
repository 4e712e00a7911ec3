import os

from .config import ANALYTICS_DAYS, DEFAULT_EXPECTED, EARLY_ARRIVAL_LIMIT  # noqa: F401

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING").upper()

DEBUG = False
