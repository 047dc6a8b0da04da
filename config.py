# config.py
import os
from dotenv import load_dotenv

# Load environment variables from .env file.
load_dotenv()

_config_cache = None


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


def load_config():
    """
    Loads configuration from environment variables and returns a dictionary.
    """
    try:
        port = int(os.getenv("PORT", 8080))
    except ValueError:
        # Fallback to the default port if parsing fails
        port = 8080

    config = {
        # General Settings
        "DEBUG_MODE": _env_bool("DEBUG_MODE", "False"),
        "APP_ENV": os.getenv("APP_ENV", "development"),
        "APP_VERSION": os.getenv("APP_VERSION", "1.0.0"),

        # Server Settings
        "HOST": os.getenv("HOST", "0.0.0.0"),
        "PORT": port,
        "SECRET_KEY": os.getenv("SECRET_KEY", "family-pane-dev-secret"),
        "MAX_CONTENT_LENGTH": int(os.getenv("MAX_CONTENT_LENGTH", 10 * 1024 * 1024)),

        # Storage Settings
        "DATABASE_PATH": os.getenv("DATABASE_PATH", "./config/pane.db"),

        # Chore Settings
        "ALLOW_CHORE_RECOMPLETION": _env_bool("ALLOW_CHORE_RECOMPLETION", "False"),

        # Real-Time Channel Settings
        "EVENT_QUEUE_SIZE": int(os.getenv("EVENT_QUEUE_SIZE", 100)),
        "EVENT_KEEPALIVE_SECONDS": float(os.getenv("EVENT_KEEPALIVE_SECONDS", 15)),
    }
    return config


def get_config():
    """
    Returns the process configuration, loading it on first use.
    """
    global _config_cache
    if _config_cache is None:
        _config_cache = load_config()
    return _config_cache


def is_production(config=None) -> bool:
    cfg = config or get_config()
    return str(cfg.get("APP_ENV", "")).lower() == "production"


if __name__ == "__main__":
    # For testing purposes, print the configuration
    config = load_config()
    from pprint import pprint

    pprint(config)
