import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "staff_presence_test"),
}

STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "memory")

TIMEZONE = os.getenv("TIMEZONE", "Asia/Manila")

RETRY_ATTEMPTS = 3
RETRY_WAIT_MIN = 0.0
RETRY_WAIT_MAX = 0.0

DEFAULT_POSTING_MINUTES = 30
MAX_POSTING_MINUTES = 24 * 60

LOG_LEVEL = "WARNING"
LOG_DIR = ""

DEBUG = False
TESTING = True

AUTO_INIT_DB = False
