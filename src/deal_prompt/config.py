"""
Configuration management for the Deal Prompt service.

Loads settings from environment variables with sensible defaults.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env file from project root
_project_root = Path(__file__).parent.parent.parent
_env_file = _project_root / '.env'
if _env_file.exists():
    load_dotenv(_env_file)


def _env_flag(name: str, default: str = 'false') -> bool:
    return os.getenv(name, default).strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    """Configuration settings loaded from environment."""

    # Logging
    LOG_LEVEL: str = os.getenv('LOG_LEVEL', 'INFO')
    LOG_JSON: bool = _env_flag('LOG_JSON')
    MAX_LOGGED_BODY_CHARS: int = int(os.getenv('MAX_LOGGED_BODY_CHARS', '500'))

    # Label tables: optional JSON override of the built-in defaults
    LABELS_PATH: str = os.getenv('LABELS_PATH', '')


# Singleton config instance
config = Config()
