"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

# Storage keys, one serialized document per key.
USER_KEY = "ledger_user"
USERS_LIST_KEY = "ledger_users_list"
LOGS_KEY = "ledger_logs"
THEME_KEY = "ledger_theme"

# Cross-session change events older than this are treated as replays.
NOTIFY_RECENCY_SECONDS = 5

INSIGHT_SAMPLE_SIZE = 50
SHEET_NAME_MAX_LENGTH = 30
DEMO_SEED_DAYS = 14

UNKNOWN_SYNC_EMAIL = "unknown@ledger.local"
AVATAR_URL_TEMPLATE = "https://ui-avatars.com/api/?name={name}&background=random"
