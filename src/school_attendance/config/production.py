import os

from .base import *  # noqa: F401,F403

DEBUG = False
COOKIE_SECURE = True

CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "").split(",") if o.strip()]

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
