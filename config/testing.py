import os

SECRET_KEY = "test-secret"
JWT_SECRET = "test-jwt-secret"
JWT_REFRESH_SECRET = "test-jwt-refresh-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "kintai_test"),
}
DB_POOL_SIZE = 2

NOTION_API_KEY = ""
NOTION_DATABASE_ID = ""

CORS_ORIGINS = "*"
PORT = 5000

APP_TIMEZONE = "Asia/Tokyo"
LOG_LEVEL = "WARNING"

DEBUG = False
TESTING = True

AUTO_INIT_DB = False
AUTO_SEED_DB = False
