# prompt_portal/core/config.py

import os
import logging
from typing import List, Optional

logger = logging.getLogger(__name__)


def read_secret_file(file_path: str) -> Optional[str]:
    """Reads a secret value from a file (for Docker Secrets)"""
    try:
        with open(file_path, 'r') as f:
            return f.read().strip()
    except (FileNotFoundError, IOError):
        return None


def get_env_or_secret(env_var: str, secret_file_var: str = None) -> Optional[str]:
    """Gets a value from environment variable or Docker secret file"""
    # First try to read from environment variable
    value = os.getenv(env_var)
    if value:
        return value

    # If not present, try Docker secret file
    if secret_file_var:
        secret_file_path = os.getenv(secret_file_var)
        if secret_file_path:
            return read_secret_file(secret_file_path)

    return None


def get_bool_env(env_var: str, default: bool) -> bool:
    value = os.getenv(env_var)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def get_list_env(env_var: str, default: List[str]) -> List[str]:
    value = os.getenv(env_var)
    if not value:
        return list(default)
    return [item.strip() for item in value.split(",") if item.strip()]


class Config:
    # Storage Configuration
    # Empty DATABASE_URL keeps all collections in process memory
    DATABASE_URL = get_env_or_secret("DATABASE_URL", "DATABASE_URL_FILE") or ""
    STORAGE_NAMESPACE = os.getenv("STORAGE_NAMESPACE", "mock_")
    SEED_DEMO_DATA = get_bool_env("SEED_DEMO_DATA", True)

    # API Configuration
    API_TITLE = "Prompt Portal API"
    API_VERSION = "1.0.0"
    CORS_ORIGINS = get_list_env("CORS_ORIGINS", ["http://localhost:3000"])

    # Security Configuration
    PASSWORD_HASH_ITERATIONS = int(os.getenv("PASSWORD_HASH_ITERATIONS", "260000"))

    # Session Configuration
    SESSION_TTL_DAYS = int(os.getenv("SESSION_TTL_DAYS", "30"))

    # Statistics Configuration
    ACTIVE_USER_WINDOW_DAYS = int(os.getenv("ACTIVE_USER_WINDOW_DAYS", "30"))

    # Logging Configuration
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    @classmethod
    def validate_config(cls) -> bool:
        """Validates the configuration and returns True if all recommended values are present"""
        recommended_vars = [
            ("DATABASE_URL", cls.DATABASE_URL),
        ]

        missing_vars = []
        for var_name, var_value in recommended_vars:
            if not var_value:
                missing_vars.append(var_name)

        if missing_vars:
            logger.warning(f"Missing configuration variables: {', '.join(missing_vars)}")
            return False

        logger.info("Configuration validated")
        return True
