"""Settings shared by every environment module (overridable via env vars)."""

import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "timeclock_db"),
}

DEBUG = bool(int(os.getenv("DEBUG", "0")))

# Apply database/schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

# Business day: starts at LEDGER_DAY_START_HOUR in a fixed UTC offset (JST by default)
LEDGER_UTC_OFFSET_HOURS = float(os.getenv("LEDGER_UTC_OFFSET_HOURS", "9"))
LEDGER_DAY_START_HOUR = int(os.getenv("LEDGER_DAY_START_HOUR", "6"))

# Chat notifications; empty URL disables the channel
SLACK_WEBHOOK_URL = os.getenv("SLACK_WEBHOOK_URL", "")
DISCORD_WEBHOOK_URL = os.getenv("DISCORD_WEBHOOK_URL", "")
NOTIFY_TIMEOUT_SECONDS = float(os.getenv("NOTIFY_TIMEOUT_SECONDS", "10"))

SESSION_DAYS = int(os.getenv("SESSION_DAYS", "30"))
