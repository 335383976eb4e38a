#!/usr/bin/env python3

import os
import json
import tomllib
from pathlib import Path

import logging
import sys

import yaml

from .exit_codes import ConfigError

logger = logging.getLogger("registrymirror")

CONFIG_FILENAMES = ['config.json', 'config.toml', 'config.yaml', 'config.yml']


def get_config_path():
    """Get the path to the configuration file.

    Checks in order:
    1. REGISTRYMIRROR_CONFIG environment variable
    2. ~/.registrymirror/ directory
    """
    # Check for environment variable override
    if 'REGISTRYMIRROR_CONFIG' in os.environ:
        path = Path(os.environ['REGISTRYMIRROR_CONFIG'])
        if path.exists():
            return path

    config_dir = Path.home() / '.registrymirror'
    for filename in CONFIG_FILENAMES:
        path = config_dir / filename
        if path.exists() and path.stat().st_size > 10:  # Not empty/trivial
            return path

    # If no file exists, return default path for saving
    return config_dir / 'config.json'


def get_default_config():
    """Get default configuration."""
    return {
        "containerd": {
            "config_path": "/etc/containerd/certs.d"
        },
        "registries": [],
        "mirrors": [],
        "server_overrides": {
            "docker.io": "https://registry-1.docker.io"
        },
        "logging": {
            "level": "INFO",
            "format": "%(levelname)s: %(message)s"
        }
    }


def load_config():
    """Load configuration from file.

    Raises:
        ConfigError: if the config file exists but cannot be parsed
    """
    config_path = get_config_path()

    # Start with default config
    config = get_default_config()

    # Load from file if it exists
    if config_path.exists():
        try:
            if config_path.suffix.lower() in ['.toml']:
                with open(config_path, 'rb') as f:
                    file_config = tomllib.load(f)
            elif config_path.suffix.lower() in ['.yaml', '.yml']:
                with open(config_path, 'r') as f:
                    file_config = yaml.safe_load(f)
            else:
                # Default to JSON format
                with open(config_path, 'r') as f:
                    file_config = json.load(f)
        except (OSError, ValueError, yaml.YAMLError) as e:
            raise ConfigError(f"Error loading config from {config_path}: {e}") from e

        if file_config:
            if not isinstance(file_config, dict):
                raise ConfigError(f"Config file {config_path} must contain a mapping")
            # Merge file config with defaults
            config = merge_configs(config, file_config)

    # Apply environment variable overrides
    config = apply_env_overrides(config)

    return config


def save_config(config):
    """Save configuration to file."""
    config_path = get_config_path()

    # Create directory if it doesn't exist
    config_path.parent.mkdir(parents=True, exist_ok=True)

    if config_path.suffix.lower() in ['.toml']:
        # tomllib is read-only
        config_path = config_path.with_suffix('.json')

    if config_path.suffix.lower() in ['.yaml', '.yml']:
        with open(config_path, 'w') as f:
            yaml.safe_dump(config, f, default_flow_style=False)
    else:
        with open(config_path, 'w') as f:
            json.dump(config, f, indent=2)

    logger.info(f"Configuration saved to {config_path}")
    return config_path


def merge_configs(base_config, override_config):
    """
    Recursively merge two configuration dictionaries.

    Args:
        base_config (dict): Base configuration
        override_config (dict): Configuration to merge/override with

    Returns:
        dict: Merged configuration
    """
    merged = base_config.copy()

    for key, value in override_config.items():
        if key == "server_overrides":
            # The override table replaces the default one instead of extending it
            merged[key] = value
        elif key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            # Recursively merge nested dictionaries
            merged[key] = merge_configs(merged[key], value)
        else:
            # Override or add new key
            merged[key] = value

    return merged


def _convert_env_value(value, current):
    if isinstance(current, list):
        return [item.strip() for item in value.split(',') if item.strip()]
    if value.lower() in ('true', '1', 'yes', 'on'):
        return True
    if value.lower() in ('false', '0', 'no', 'off'):
        return False
    if value.isdigit():
        return int(value)
    return value


def apply_env_overrides(config):
    """
    Apply environment variable overrides to configuration.
    Environment variables follow the pattern: REGISTRYMIRROR_SECTION_KEY
    For example: REGISTRYMIRROR_CONTAINERD_CONFIG_PATH=/etc/containerd/certs.d
    List values are comma separated: REGISTRYMIRROR_MIRRORS=http://a,http://b
    """
    env_prefix = "REGISTRYMIRROR_"

    for env_key, value in os.environ.items():
        if not env_key.startswith(env_prefix) or env_key == "REGISTRYMIRROR_CONFIG":
            continue

        key_parts = env_key[len(env_prefix):].lower().split('_')

        current_level = config
        i = 0
        while i < len(key_parts):
            # Find the longest key in current_level that is a prefix of the remaining key_parts
            best_match_len = 0
            matched_key = None

            for config_key in current_level.keys():
                config_key_parts_from_key = config_key.split('_')
                if key_parts[i : i + len(config_key_parts_from_key)] == config_key_parts_from_key:
                    if len(config_key_parts_from_key) > best_match_len:
                        best_match_len = len(config_key_parts_from_key)
                        matched_key = config_key

            if matched_key:
                # If we are at the end of the env var, we have found the key to set
                if i + best_match_len == len(key_parts):
                    current_level[matched_key] = _convert_env_value(value, current_level[matched_key])
                    break

                # Otherwise, we descend into the dictionary
                if isinstance(current_level[matched_key], dict):
                    current_level = current_level[matched_key]
                    i += best_match_len
                else:
                    # Path conflict, e.g., env var is longer but we found a non-dict value
                    break
            else:
                # No match found
                break

    return config


def configure_logging(config, debug=False):
    """Apply the logging section of the configuration to the root logger."""
    log_config = config.get("logging", {})
    level = "DEBUG" if debug else str(log_config.get("level", "INFO")).upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format=log_config.get("format", "%(levelname)s: %(message)s"),
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )
