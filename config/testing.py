from .config import Config

SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

HOLIDAYS = ""
ANNUAL_ENTITLEMENTS = dict(Config.ANNUAL_ENTITLEMENTS)
GRACE_MINUTES = 2
EARLY_ARRIVAL_PENALTY = 3
MAX_WORKERS = 1
