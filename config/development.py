import os

from .config import ACTIVITY_LOG_ENABLED, RECENT_DAYS, SESSION_DAYS, STRICT_REVIEW, db_config_from_env, env_flag

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = db_config_from_env(default_password="leave123")

DEBUG = True

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "1")
# Optional: also seed demo accounts on startup
AUTO_SEED_DB = env_flag("AUTO_SEED_DB", "0")
