import os

from .config import Config

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

HOLIDAYS = Config.HOLIDAYS
ANNUAL_ENTITLEMENTS = Config.ANNUAL_ENTITLEMENTS
GRACE_MINUTES = Config.GRACE_MINUTES
EARLY_ARRIVAL_PENALTY = Config.EARLY_ARRIVAL_PENALTY
MAX_WORKERS = int(os.getenv("MAX_WORKERS", "4"))
