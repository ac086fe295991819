"""Configuration for dokumentovac: constants, environment settings, UI config."""

from .constants import API_BASE_URL, DEFAULT_PAGE_SIZE
from .settings import get_api_base_url, get_config_dir, get_timeout

__all__ = [
    "API_BASE_URL",
    "DEFAULT_PAGE_SIZE",
    "get_api_base_url",
    "get_config_dir",
    "get_timeout",
]
