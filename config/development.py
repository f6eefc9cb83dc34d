import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
LOG_FILE = os.getenv("LOG_FILE") or None

# "mysql" or "memory" (dict-backed, nothing persisted)
STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "mysql")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "team_scheduler"),
}

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed demo data on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")

# Sheet import (service account): inline JSON wins over a key file path
GOOGLE_CREDENTIALS_JSON = os.getenv("GOOGLE_CREDENTIALS_JSON") or None
GOOGLE_APPLICATION_CREDENTIALS = os.getenv("GOOGLE_APPLICATION_CREDENTIALS") or None

# Calendar export
CALENDAR_NAME = os.getenv("CALENDAR_NAME", "Team Schedule")
CALENDAR_TIME_ZONE = os.getenv("CALENDAR_TIME_ZONE", "Asia/Tokyo")
EXPORT_DAYS = int(os.getenv("EXPORT_DAYS", "20"))

# Web Push
VAPID_PUBLIC_KEY = os.getenv("VAPID_PUBLIC_KEY") or None
VAPID_PRIVATE_KEY = os.getenv("VAPID_PRIVATE_KEY") or None
VAPID_CLAIM_EMAIL = os.getenv("VAPID_CLAIM_EMAIL", "admin@example.com")
