import os

SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")
LOG_FILE = None

STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "memory")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "team_scheduler_test"),
}

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

CORS_ORIGINS = "*"

GOOGLE_CREDENTIALS_JSON = None
GOOGLE_APPLICATION_CREDENTIALS = None

CALENDAR_NAME = "Team Schedule"
CALENDAR_TIME_ZONE = "Asia/Tokyo"
EXPORT_DAYS = 20

VAPID_PUBLIC_KEY = "test-vapid-public-key"
VAPID_PRIVATE_KEY = "test-vapid-private-key"
VAPID_CLAIM_EMAIL = "admin@example.com"
