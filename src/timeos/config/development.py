import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "timeos_db"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))

# One JSON file per (user, device) timer slot lives here
TIMER_STATE_DIR = os.getenv("TIMER_STATE_DIR", "instance/timers")
TICK_INTERVAL_MS = int(os.getenv("TICK_INTERVAL_MS", "100"))

# Built-in administrator login; empty string disables it
ADMIN_ACCESS_CODE = os.getenv("ADMIN_ACCESS_CODE", "admin123")

GEMINI_API_KEY = os.getenv("GEMINI_API_KEY", "")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-pro")
GEMINI_TIMEOUT = float(os.getenv("GEMINI_TIMEOUT", "30"))

SMTP_HOST = os.getenv("SMTP_HOST", "localhost")
SMTP_PORT = int(os.getenv("SMTP_PORT", "1025"))
SMTP_USER = os.getenv("SMTP_USER", "")
SMTP_PASSWORD = os.getenv("SMTP_PASSWORD", "")
SMTP_USE_TLS = bool(int(os.getenv("SMTP_USE_TLS", "0")))
MAIL_SENDER = os.getenv("MAIL_SENDER", "TimeOS <reports@timeos.local>")
