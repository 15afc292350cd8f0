# Common utilities
from .config_loader import DEFAULT_SETTINGS, load_config, load_settings, merge_settings
from .http_client import build_headers, create_session
from .log_config import setup_logging
from .text_utils import (
    clean_text,
    first_name_token,
    normalize_digits,
    strip_html,
    strip_subtitle,
    truncate,
)
