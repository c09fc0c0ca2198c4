import json
import os

DEFAULT_CONFIG_PATH = "config/runtime_config.json"

DEFAULT_CONFIG = {
    "max_steps": 0,
    "workers": 0,
    "clear_screen": True,
    "quit_message": "App closed",
    "enable_logging": False,
    "output_directory": "logs/",
    "log_file_prefix": "turing_"
}

# Expected types for validation
CONFIG_SCHEMA = {
    "max_steps": int,
    "workers": int,
    "clear_screen": bool,
    "quit_message": str,
    "enable_logging": bool,
    "output_directory": str,
    "log_file_prefix": str
}

def validate_config(config):
    for key, expected_type in CONFIG_SCHEMA.items():
        if key not in config:
            raise ValueError(f"Missing required configuration key: {key}")
        value = config[key]
        # bool is an int subclass, don't let true/false through as a count
        if expected_type is int and isinstance(value, bool):
            raise TypeError(f"Config key '{key}' expected {expected_type}, got {type(value)}.")
        if not isinstance(value, expected_type):
            raise TypeError(f"Config key '{key}' expected {expected_type}, got {type(value)}.")

    for key in ("max_steps", "workers"):
        if config[key] < 0:
            raise ValueError(f"Config key '{key}' must be 0 or positive, got {config[key]}.")

def load_config(path=None):
    """Defaults merged with the JSON overrides at path.

    Without an explicit path the default location is optional.
    """
    if path is None:
        path = DEFAULT_CONFIG_PATH
        if not os.path.exists(path):
            return DEFAULT_CONFIG.copy()
    elif not os.path.exists(path):
        raise FileNotFoundError(f"Configuration file not found at: {path}")

    with open(path, "r", encoding="utf-8") as f:
        user_config = json.load(f)

    if not isinstance(user_config, dict):
        raise ValueError(f"Configuration file {path} must hold a JSON object")

    # Merge defaults with overrides
    config = DEFAULT_CONFIG.copy()
    config.update(user_config)

    validate_config(config)

    if config["enable_logging"]:
        os.makedirs(config["output_directory"], exist_ok=True)

    return config
