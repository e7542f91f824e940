"""
Reader configuration: defaults, optional config.json, environment overrides.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

from palireader.core.transformer import DEFAULT_DICTIONARY_URL, DEFAULT_DICTIONARY_TAB
from palireader.core.library import DEFAULT_EXTENSIONS, MAX_FILE_SIZE

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = 'config.json'

DEFAULTS = {
    'library_dir': '2_pali',
    'dictionary_url': DEFAULT_DICTIONARY_URL,
    'dictionary_tab': DEFAULT_DICTIONARY_TAB,
    'allowed_extensions': list(DEFAULT_EXTENSIONS),
    'max_file_size': MAX_FILE_SIZE,
    'disabled_features': [],
    'host': '0.0.0.0',
    'port': 8000,
}

ENV_OVERRIDES = {
    'PALIREADER_LIBRARY': ('library_dir', str),
    'PALIREADER_DICTIONARY_URL': ('dictionary_url', str),
    'PALIREADER_PORT': ('port', int),
}


def get_base_path() -> Path:
    """Directory that relative config paths are resolved against."""
    return Path(os.path.abspath("."))


def is_valid_value(key: str, value: Any) -> bool:
    """True when a config.json value has the same shape as its default."""
    default = DEFAULTS[key]
    if isinstance(default, list):
        return isinstance(value, list) and all(isinstance(item, str) for item in value)
    if isinstance(default, int):
        # JSON true/false would otherwise pass as int
        return isinstance(value, int) and not isinstance(value, bool)
    return isinstance(value, type(default))


def load_config(config_file: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """
    Load configuration. A missing or broken file falls back to the defaults,
    and a value of the wrong type falls back to the default for that key.
    """
    config = dict(DEFAULTS)

    if config_file is None:
        config_file = os.environ.get('PALIREADER_CONFIG', get_base_path() / CONFIG_FILE_NAME)
    config_file = Path(config_file)

    if config_file.exists():
        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError("top-level JSON value must be an object")
            unknown = set(data) - set(DEFAULTS)
            if unknown:
                logger.warning(f"Ignoring unknown config keys: {sorted(unknown)}")
            for key, value in data.items():
                if key not in DEFAULTS:
                    continue
                if not is_valid_value(key, value):
                    logger.error(f"Invalid value for '{key}' in {config_file}: {value!r}, "
                                 f"using default {DEFAULTS[key]!r}")
                    continue
                config[key] = value
            logger.info(f"Loaded config from {config_file}")
        except (OSError, ValueError) as e:
            logger.error(f"Failed to load config {config_file}: {e}")

    for env_name, (key, cast) in ENV_OVERRIDES.items():
        value = os.environ.get(env_name)
        if value:
            try:
                config[key] = cast(value)
            except ValueError:
                logger.error(f"Invalid value for {env_name}: {value!r}")

    config['library_dir'] = str((get_base_path() / config['library_dir']).resolve())

    return config


def to_flask_config(config: Dict[str, Any]) -> Dict[str, Any]:
    """Map config keys onto upper-case Flask app.config keys."""
    return {key.upper(): value for key, value in config.items()}
