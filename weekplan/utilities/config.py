"""Configuration management for the Weekly Planner application."""
import os
from datetime import date
from typing import Final
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file if it exists
env_path = Path(__file__).parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)

# Access
FAMILY_PASSWORD: Final[str] = os.getenv('FAMILY_PASSWORD', 'Bruno')
APP_NAME: Final[str] = os.getenv('APP_NAME', 'family-calendar')

# Planner Settings
PLANNER_YEAR: Final[int] = int(os.getenv('PLANNER_YEAR', str(date.today().year)))
SAVE_DEBOUNCE_SECONDS: Final[float] = float(os.getenv('SAVE_DEBOUNCE_SECONDS', '1.0'))
# Year slot known to hold bad data from early installs; dropped by the one-time cleanup
LEGACY_PURGE_YEAR: Final[int] = int(os.getenv('LEGACY_PURGE_YEAR', '2025'))

# Application Settings
APP_HOST: Final[str] = os.getenv('APP_HOST', '0.0.0.0')
APP_PORT: Final[int] = int(os.getenv('APP_PORT', '8000'))
DEBUG: Final[bool] = os.getenv('DEBUG', 'False').lower() == 'true'
LOG_LEVEL: Final[str] = os.getenv('LOG_LEVEL', 'INFO').upper()

# File Paths
BASE_DIR: Final[Path] = Path(__file__).parent.parent
DATA_DIR: Final[Path] = Path(os.getenv('WEEKPLAN_DATA_DIR', str(BASE_DIR / 'data'))).resolve()
