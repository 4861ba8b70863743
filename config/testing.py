SECRET_KEY = "test-secret"

STORAGE_BACKEND = "memory"
DB_CONFIG = {}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False
AUTO_SEED_DB = False

NOTIFY_RECENCY_SECONDS = 5

INSIGHT_API_KEY = None
INSIGHT_MODEL = "gemini-2.5-flash"
INSIGHT_TIMEOUT_SECONDS = 5

SHEETS_WEBHOOK_URL = ""
SYNC_TIMEOUT_SECONDS = 5
