"""Configuration management for the AOZ CLI."""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict

# Default configuration directory
CONFIG_DIR = Path.home() / ".aoz"
CONFIG_FILE = CONFIG_DIR / "config.json"

DEFAULT_CONFIG = {
    "api_base_url": "http://localhost:5000",
}


def ensure_config_dir() -> Path:
    """Ensure configuration directory exists."""
    CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True)
    return CONFIG_FILE.parent


def load_config() -> Dict[str, Any]:
    """Load configuration from file and environment."""
    config = DEFAULT_CONFIG.copy()

    # Load from file if exists
    if CONFIG_FILE.exists():
        try:
            with open(CONFIG_FILE) as f:
                config.update(json.load(f))
        except (json.JSONDecodeError, IOError):
            pass

    # Override with environment variables
    if os.environ.get("AOZ_API_BASE_URL"):
        config["api_base_url"] = os.environ["AOZ_API_BASE_URL"]

    return config


def save_config(config: Dict[str, Any]) -> None:
    """Save configuration to file."""
    ensure_config_dir()

    save_data = {k: v for k, v in config.items() if k in ("api_base_url", "wallet_address")}

    with open(CONFIG_FILE, "w") as f:
        json.dump(save_data, f, indent=2)
