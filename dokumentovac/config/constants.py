"""
Centralized constants for Dokumentovač.

Magic numbers and defaults used by the service client, the documents view
and the CLI live here so they can be found and changed in one place.
"""

from pathlib import Path

# =============================================================================
# DOCUMENT SERVICE
# =============================================================================

API_BASE_URL = "http://localhost:3000"
DEFAULT_TIMEOUT_SECONDS = 30.0  # Per-request timeout owned by the service client

# =============================================================================
# PAGINATION
# =============================================================================

DEFAULT_PAGE_SIZE = 10  # Documents per page, sent as `limit`
FIRST_PAGE = 1

# =============================================================================
# ADDRESS BAR
# =============================================================================

LOCATION_PATH = "/documents"
SEARCH_PARAM = "search"
TAG_PARAM = "tag"
PAGE_PARAM = "page"

# =============================================================================
# FILES & LOGGING
# =============================================================================

DEFAULT_CONFIG_DIR = Path.home() / ".config" / "dokumentovac"
SESSION_FILE_NAME = "session.json"
UI_CONFIG_FILE_NAME = "ui_config.json"
LOG_FILE_NAME = "dokumentovac.log"
MAX_LOG_BYTES = 5 * 1024 * 1024  # 5MB
LOG_BACKUP_COUNT = 2

# =============================================================================
# ENVIRONMENT VARIABLES
# =============================================================================

ENV_VAR_DEFINITIONS = {
    "DOKUMENTOVAC_API_URL": {
        "description": "Base URL of the document service",
        "default": API_BASE_URL,
        "valid_values": None,
    },
    "DOKUMENTOVAC_TIMEOUT": {
        "description": "Request timeout in seconds",
        "default": str(DEFAULT_TIMEOUT_SECONDS),
        "valid_values": None,
    },
    "DOKUMENTOVAC_CONFIG_DIR": {
        "description": "Directory for session, UI config and logs",
        "default": None,
        "valid_values": None,
    },
    "DOKUMENTOVAC_LOG_LEVEL": {
        "description": "Log level for the rotating log file",
        "default": "INFO",
        "valid_values": ["DEBUG", "INFO", "WARNING", "ERROR"],
    },
    "DOKUMENTOVAC_TOKEN": {
        "description": "Bearer token overriding the stored session",
        "default": None,
        "valid_values": None,
        "sensitive": True,
    },
}
