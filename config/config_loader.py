import json
import os
from datetime import datetime

DEFAULT_CONFIG = {
    "zero": "_",
    "init_margin": 0,
    "max_steps": 1_000_000,
    "log_frequency": 100,
    "trace_enabled": False,
    "show_progress": True,
    "output_directory": "logs/",
    "log_file_prefix": "tapemachine_"
}

# Expected types for validation
CONFIG_SCHEMA = {
    "zero": str,
    "init_margin": int,
    "max_steps": int,
    "log_frequency": int,
    "trace_enabled": bool,
    "show_progress": bool,
    "output_directory": str,
    "log_file_prefix": str
}

def validate_config(config):
    for key, expected_type in CONFIG_SCHEMA.items():
        if key not in config:
            raise ValueError(f"Missing required configuration key: {key}")
        value = config[key]
        # bool is a subclass of int; don't let True pass as a step count
        if expected_type is int and isinstance(value, bool):
            raise TypeError(f"Config key '{key}' expected {expected_type}, got {type(value)}.")
        if not isinstance(value, expected_type):
            raise TypeError(f"Config key '{key}' expected {expected_type}, got {type(value)}.")

    if len(config["zero"]) != 1:
        raise ValueError("Blank symbol 'zero' must be a single character.")
    if config["init_margin"] < 0:
        raise ValueError("'init_margin' must be non-negative.")
    if config["max_steps"] <= 0:
        raise ValueError("'max_steps' must be positive.")
    if config["log_frequency"] <= 0:
        raise ValueError("'log_frequency' must be positive.")

def load_config(path="config/runtime_config.json"):
    if not os.path.exists(path):
        raise FileNotFoundError(f"Configuration file not found at: {path}")

    with open(path, "r") as f:
        user_config = json.load(f)

    # Merge defaults with overrides
    config = DEFAULT_CONFIG.copy()
    config.update(user_config)

    # Validate schema
    validate_config(config)

    # Validate output directory
    os.makedirs(config["output_directory"], exist_ok=True)

    # Print config summary
    print(f"[{datetime.now()}] Loaded config:")
    for key, value in config.items():
        print(f"  {key}: {value}")

    return config
