import os

PLACEHOLDER_SECRET = "please-set-SECRET_KEY"

SECRET_KEY = os.getenv("SECRET_KEY", PLACEHOLDER_SECRET)

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "school_attendance"),
    "pool_size": int(os.getenv("DB_POOL_SIZE", "10")),
    # seconds to wait for a free pooled connection before giving up
    "acquire_timeout": float(os.getenv("DB_ACQUIRE_TIMEOUT", "2")),
}

DEBUG = False

TOKEN_TTL_HOURS = int(os.getenv("TOKEN_TTL_HOURS", "24"))
COOKIE_SECURE = False

RATELIMIT_ENABLED = True
RATE_LIMIT_AUTH = os.getenv("RATE_LIMIT_AUTH", "1000 per 15 minutes")
RATE_LIMIT_TEACHER = os.getenv("RATE_LIMIT_TEACHER", "100 per 15 minutes")
RATE_LIMIT_STUDENT = os.getenv("RATE_LIMIT_STUDENT", "100 per 15 minutes")

CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "http://localhost:5173,http://127.0.0.1:5173").split(",") if o.strip()]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE") or None

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
