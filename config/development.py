import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

# "memory" keeps the ledger in-process; "mysql" persists it in DB_CONFIG.
STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "memory")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_ledger"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, the ledger table is created on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: fill an empty ledger with two weeks of demo history
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "1")))

NOTIFY_RECENCY_SECONDS = float(os.getenv("NOTIFY_RECENCY_SECONDS", "5"))

INSIGHT_API_KEY = os.getenv("INSIGHT_API_KEY") or os.getenv("API_KEY")
INSIGHT_MODEL = os.getenv("INSIGHT_MODEL", "gemini-2.5-flash")
INSIGHT_TIMEOUT_SECONDS = float(os.getenv("INSIGHT_TIMEOUT_SECONDS", "30"))

SHEETS_WEBHOOK_URL = os.getenv("SHEETS_WEBHOOK_URL", "")
SYNC_TIMEOUT_SECONDS = float(os.getenv("SYNC_TIMEOUT_SECONDS", "10"))
