import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "timeos_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False

TIMER_STATE_DIR = os.getenv("TIMER_STATE_DIR", "instance/test-timers")
TICK_INTERVAL_MS = 100

ADMIN_ACCESS_CODE = "admin123"

GEMINI_API_KEY = ""
GEMINI_MODEL = "gemini-pro"
GEMINI_TIMEOUT = 5.0

SMTP_HOST = "localhost"
SMTP_PORT = 1025
SMTP_USER = ""
SMTP_PASSWORD = ""
SMTP_USE_TLS = False
MAIL_SENDER = "TimeOS <reports@timeos.test>"
