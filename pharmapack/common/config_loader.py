"""
Configuration Loader

Loads YAML configuration files for the descriptor parser grammar
and segment limits.
"""

from pathlib import Path
from typing import Any, Dict

import yaml


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
    Load a YAML configuration file.

    Args:
        filename: Name of the config file (e.g., 'parsing.yaml')

    Returns:
        Parsed YAML content as dictionary (empty dict for an empty file)

    Raises:
        FileNotFoundError: If config file doesn't exist
    """
    config_path = _get_config_dir() / filename

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        return yaml.safe_load(f) or {}


def load_parsing_config() -> Dict[str, Any]:
    """
    Load the descriptor grammar section.

    Returns:
        Dictionary of grammar constants and limits

    Example:
        {
            'currency_marker': '৳',
            'flat_price_prefix': 'Unit Price:',
            'max_priced_segments': 7,
            ...
        }
    """
    config = load_config('parsing.yaml')
    return config.get('parsing', {})


def load_parser_settings():
    """
    Load parser settings from config/parsing.yaml.

    Returns:
        ParserSettings with config values over the built-in defaults
    """
    # models.settings imports common.constants; import here to avoid a cycle
    from ..models.settings import ParserSettings

    return ParserSettings.from_dict(load_parsing_config())
