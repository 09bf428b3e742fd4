"""
Production configuration for the Shonan surf forecast service.

This file contains deployment settings that differ from development.
Every value can be overridden through an environment variable.
"""

import os

# Detect if running on PythonAnywhere
is_pythonanywhere = 'PYTHONANYWHERE_DOMAIN' in os.environ

if is_pythonanywhere:
    # PythonAnywhere path structure
    username = os.environ.get('USERNAME', 'username')
    PROJECT_ROOT = f'/home/{username}/surfcast'
else:
    # Local development - use current directory
    PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

LOGS_DIR = os.path.join(PROJECT_ROOT, 'logs')

# Forecast feed (reporting-office JSON relayed through a small proxy)
FEED_URL = os.environ.get('FEED_URL', 'https://surf-weather-api-5sv5.vercel.app/api/weather')
# Area records whose name contains this keyword are preferred (Kanagawa east)
FEED_AREA_KEYWORD = os.environ.get('FEED_AREA_KEYWORD', '東部')
FEED_TIMEOUT = float(os.environ.get('FEED_TIMEOUT', '10'))
FEED_RETRIES = int(os.environ.get('FEED_RETRIES', '1'))

# Externally owned equipment catalog (JSON list of board profiles)
EQUIPMENT_CATALOG_PATH = os.environ.get(
    'EQUIPMENT_CATALOG_PATH',
    os.path.join(PROJECT_ROOT, 'config', 'equipment.json')
)

# CORS settings
ALLOWED_ORIGIN = os.environ.get('ALLOWED_ORIGIN', '*')

# Logging configuration
LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
LOG_FILE = os.path.join(LOGS_DIR, 'app.log')

# Flask configuration
FLASK_ENV = os.environ.get('FLASK_ENV', 'production' if is_pythonanywhere else 'development')
DEBUG = FLASK_ENV != 'production'


def ensure_directories():
    """Create the log directory if it doesn't exist."""
    os.makedirs(LOGS_DIR, exist_ok=True)
