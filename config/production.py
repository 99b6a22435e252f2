import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "salon_suite"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

KIOSK_IDLE_SECONDS = int(os.getenv("KIOSK_IDLE_SECONDS", "60"))
KIOSK_BASE_URL = os.getenv("KIOSK_BASE_URL", "https://salon.example.com")

STAFFING_UNDER_RATIO = float(os.getenv("STAFFING_UNDER_RATIO", "0.90"))
STAFFING_OVER_RATIO = float(os.getenv("STAFFING_OVER_RATIO", "0.50"))
STAFFING_TARGET_RATIO = float(os.getenv("STAFFING_TARGET_RATIO", "0.75"))
