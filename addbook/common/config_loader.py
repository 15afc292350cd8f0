"""
Configuration Loader

Loads YAML configuration files for note settings, HTTP behaviour and
summary lookups. Values missing from the file fall back to DEFAULT_SETTINGS.
"""

import copy
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

DEFAULT_SETTINGS: Dict[str, Any] = {
    "notes": {
        "vault": "",
        "template_path": "",
        "save_folder": "",
    },
    "http": {
        "user_agent": "Mozilla/5.0",
        "timeout": 30,
    },
    "summary": {
        "enabled": True,
        "min_length": 20,
        "max_length": 500,
        "max_results": 3,
        "google_books_url": "https://www.googleapis.com/books/v1/volumes",
        "google_books_api_key": "",
        "open_library_url": "https://openlibrary.org",
    },
}


def _get_config_dir() -> Path:
    """Get the config directory path."""
    # Try relative to this file first
    module_dir = Path(__file__).parent.parent.parent
    config_dir = module_dir / 'config'

    if config_dir.exists():
        return config_dir

    # Try current working directory
    cwd_config = Path.cwd() / 'config'
    if cwd_config.exists():
        return cwd_config

    raise FileNotFoundError(
        f"Config directory not found. Tried: {config_dir}, {cwd_config}"
    )


def load_config(filename: str) -> Dict[str, Any]:
    """
    Load a YAML configuration file from the config directory.

    Args:
        filename: Name of the config file (e.g., 'settings.yaml')

    Returns:
        Parsed YAML content as dictionary (empty file gives {})

    Raises:
        FileNotFoundError: If config file doesn't exist
    """
    config_path = _get_config_dir() / filename

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        return yaml.safe_load(f) or {}


def merge_settings(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Recursively merge overrides into a copy of base.

    Args:
        base: Default values
        overrides: Values read from a config file

    Returns:
        New merged dictionary; base is not modified
    """
    merged = copy.deepcopy(base)
    for key, value in (overrides or {}).items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_settings(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_settings(path: Optional[str | Path] = None) -> Dict[str, Any]:
    """
    Load application settings.

    Args:
        path: Explicit settings file. If None, loads config/settings.yaml
              and falls back to defaults when no config directory exists.

    Returns:
        Settings dictionary with every DEFAULT_SETTINGS key present

    Example:
        {
            'notes': {'template_path': 'Templates/book.md', 'save_folder': 'Books'},
            'http': {'user_agent': 'Mozilla/5.0', 'timeout': 30},
            'summary': {'enabled': True, 'min_length': 20, ...},
        }
    """
    if path is not None:
        with open(path, 'r', encoding='utf-8') as f:
            return merge_settings(DEFAULT_SETTINGS, yaml.safe_load(f) or {})

    try:
        overrides = load_config('settings.yaml')
    except FileNotFoundError:
        overrides = {}

    return merge_settings(DEFAULT_SETTINGS, overrides)
