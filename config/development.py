import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

# memory | json | mysql
STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "json")
STORAGE_PATH = os.getenv("STORAGE_PATH", "instance/local_storage.json")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "evaluation_db"),
}

FIXTURES_DIR = os.getenv("FIXTURES_DIR") or None

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Apply schema.sql on startup when the mysql backend is used (CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Fill empty storage keys from the JSON fixtures on startup
AUTO_SEED_STORAGE = bool(int(os.getenv("AUTO_SEED_STORAGE", "1")))
