from .base import *  # noqa: F401,F403

SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True

RATELIMIT_ENABLED = False
LOG_LEVEL = "WARNING"
LOG_FILE = None

AUTO_INIT_DB = False
