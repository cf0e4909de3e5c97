from .config import ACTIVITY_LOG_ENABLED, RECENT_DAYS, SESSION_DAYS, STRICT_REVIEW, db_config_from_env, env_flag

SECRET_KEY = "test-secret"

DB_CONFIG = db_config_from_env(default_password="12345")

DEBUG = False
TESTING = True

AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "0")
AUTO_SEED_DB = env_flag("AUTO_SEED_DB", "0")
