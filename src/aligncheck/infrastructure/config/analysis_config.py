#!/usr/bin/env python3

"""Tuning flags for record enumeration, overridable from the environment."""

import os
from typing import Any

ENV_PREFIX = "ALIGNCHECK_"

# Default configuration values
DEFAULT_CONFIG: dict[str, Any] = {
    # Record selection
    "INCLUDE_ANONYMOUS": False,  # Anonymous structs have no name to report
    "DEDUPLICATE_RECORDS": True,  # Header types repeat in every CU that includes them

    # Cache sizes
    "TYPE_CACHE_SIZE": 5000,
}


def get_config() -> dict[str, Any]:
    """Get configuration with environment variable overrides.

    Returns:
        Configuration dictionary
    """
    config = DEFAULT_CONFIG.copy()

    for key, default in config.items():
        env_value = os.getenv(f"{ENV_PREFIX}{key}")
        if env_value is None:
            continue
        if isinstance(default, bool):
            config[key] = env_value.lower() in ("true", "1", "yes", "on")
        elif isinstance(default, int):
            try:
                config[key] = int(env_value)
            except ValueError:
                raise ValueError(
                    f"{ENV_PREFIX}{key} must be an integer, got {env_value!r}"
                ) from None
        else:
            config[key] = env_value

    return config
