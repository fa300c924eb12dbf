import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "staff_presence"),
}

# "mysql" or "memory"
STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "mysql")

TIMEZONE = os.getenv("TIMEZONE", "Asia/Manila")

RETRY_ATTEMPTS = int(os.getenv("RETRY_ATTEMPTS", "3"))
RETRY_WAIT_MIN = float(os.getenv("RETRY_WAIT_MIN", "0.1"))
RETRY_WAIT_MAX = float(os.getenv("RETRY_WAIT_MAX", "2.0"))

DEFAULT_POSTING_MINUTES = int(os.getenv("DEFAULT_POSTING_MINUTES", "30"))
MAX_POSTING_MINUTES = int(os.getenv("MAX_POSTING_MINUTES", str(24 * 60)))

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
LOG_DIR = os.getenv("LOG_DIR", "")

DEBUG = True

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
