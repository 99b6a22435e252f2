import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "salon_suite"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed demo data on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

# Kiosk sessions fall back to idle after this many seconds without activity.
KIOSK_IDLE_SECONDS = int(os.getenv("KIOSK_IDLE_SECONDS", "60"))
KIOSK_BASE_URL = os.getenv("KIOSK_BASE_URL", "http://localhost:5000")

# Booked / scheduled hour ratios for the staffing balance.
STAFFING_UNDER_RATIO = float(os.getenv("STAFFING_UNDER_RATIO", "0.90"))
STAFFING_OVER_RATIO = float(os.getenv("STAFFING_OVER_RATIO", "0.50"))
STAFFING_TARGET_RATIO = float(os.getenv("STAFFING_TARGET_RATIO", "0.75"))
