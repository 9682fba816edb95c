import os

from .config import Config

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

HOLIDAYS = Config.HOLIDAYS
ANNUAL_ENTITLEMENTS = Config.ANNUAL_ENTITLEMENTS
GRACE_MINUTES = Config.GRACE_MINUTES
EARLY_ARRIVAL_PENALTY = Config.EARLY_ARRIVAL_PENALTY
MAX_WORKERS = Config.MAX_WORKERS
