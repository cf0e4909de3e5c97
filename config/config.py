import os


def env_flag(name: str, default: str = "0") -> bool:
    return bool(int(os.getenv(name, default)))


def db_config_from_env(default_password: str = "") -> dict:
    return {
        "host": os.getenv("DB_HOST", "localhost"),
        "port": int(os.getenv("DB_PORT", "3306")),
        "user": os.getenv("DB_USER", "root"),
        "password": os.getenv("DB_PASSWORD", default_password),
        "database": os.getenv("DB_NAME", "leave_db"),
    }


# Shared by every environment.
SESSION_DAYS = int(os.getenv("SESSION_DAYS", "7"))
RECENT_DAYS = int(os.getenv("RECENT_DAYS", "7"))
ACTIVITY_LOG_ENABLED = env_flag("ACTIVITY_LOG_ENABLED", "1")
# 1: a second review of the same request is refused (409); 0: last writer wins.
STRICT_REVIEW = env_flag("STRICT_REVIEW", "1")
