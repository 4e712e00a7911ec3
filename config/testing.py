SECRET_KEY = "test-secret"

LOG_LEVEL = "DEBUG"

DEFAULT_EXPECTED = None
EARLY_ARRIVAL_LIMIT = 3
ANALYTICS_DAYS = 30

DEBUG = False
TESTING = True
