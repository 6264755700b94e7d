# bucketsync Configuration Loader
# Load, save, and validate YAML configuration with environment overrides

import copy
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import find_dotenv, load_dotenv
from pydantic import ValidationError

from bucketsync.config.defaults import DEFAULT_CONFIG, ENV_OVERRIDES, generate_default_config
from bucketsync.config.schema import BucketsyncConfig


def get_config_dir() -> Path:
    """Get the bucketsync configuration directory."""
    return Path.home() / ".config" / "bucketsync"


def get_config_path() -> Path:
    """Get the path to the configuration file."""
    env_path = os.environ.get("BUCKETSYNC_CONFIG")
    if env_path:
        return Path(env_path).expanduser()
    return get_config_dir() / "config.yaml"


def load_config(
    config_path: Optional[Path] = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
    use_dotenv: bool = True,
) -> BucketsyncConfig:
    """
    Load configuration.

    The YAML file is optional; when it is missing the defaults are used.
    Environment variables (and a .env file in the working directory) are
    applied on top.

    Args:
        config_path: Optional path to config file. Uses default if not provided.
        environ: Environment mapping. Uses os.environ if not provided.
        use_dotenv: Load a .env file into the environment first.

    Returns:
        BucketsyncConfig: Validated configuration object.

    Raises:
        FileNotFoundError: If an explicitly given config file doesn't exist.
        ValidationError: If the configuration is invalid.
    """
    explicit = config_path is not None
    if config_path is None:
        config_path = get_config_path()

    data: dict[str, Any] = {}
    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    elif explicit:
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    if use_dotenv:
        load_dotenv(find_dotenv(usecwd=True))

    merged = _merge_with_defaults(data)
    _apply_env_overrides(merged, os.environ if environ is None else environ)

    return BucketsyncConfig.model_validate(merged)


def save_config(config: BucketsyncConfig, config_path: Optional[Path] = None) -> Path:
    """
    Save configuration to YAML file.

    Credentials are never written.

    Returns:
        Path: Path where config was saved.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = config.model_dump(exclude_none=True, mode="json")
    data.get("storage", {}).pop("access_key_id", None)
    data.get("storage", {}).pop("secret_access_key", None)

    with open(config_path, "w", encoding="utf-8") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False, allow_unicode=True)

    return config_path


def ensure_config_exists(config_path: Optional[Path] = None, *, force: bool = False) -> tuple[Path, bool]:
    """
    Ensure configuration file exists, creating default if needed.

    Returns:
        Tuple of (config_path, was_created).
    """
    if config_path is None:
        config_path = get_config_path()

    if config_path.exists() and not force:
        return config_path, False

    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(generate_default_config(), encoding="utf-8")
    return config_path, True


def validate_config_file(config_path: Optional[Path] = None) -> tuple[bool, list[str]]:
    """
    Validate a configuration file.

    Returns:
        Tuple of (is_valid, error_messages).
    """
    if config_path is None:
        config_path = get_config_path()

    if not config_path.exists():
        return False, [f"Configuration file not found: {config_path}"]

    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        return False, [f"Invalid YAML syntax: {e}"]

    if data is None:
        return False, ["Configuration file is empty"]
    if not isinstance(data, dict):
        return False, ["Configuration root must be a mapping"]

    try:
        BucketsyncConfig.model_validate(data)
    except ValidationError as e:
        errors = []
        for error in e.errors():
            loc = " -> ".join(str(part) for part in error["loc"])
            errors.append(f"{loc}: {error['msg']}")
        return False, errors

    return True, []


def _merge_with_defaults(data: dict) -> dict:
    """Merge loaded data with default values for missing keys."""
    result = copy.deepcopy(DEFAULT_CONFIG)

    for key, value in data.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = {**result[key], **value}
        else:
            result[key] = value

    return result


def _apply_env_overrides(data: dict, environ: Mapping[str, str]) -> None:
    """Overlay non-empty environment variables onto the config dict."""
    for env_name, path in ENV_OVERRIDES.items():
        value = environ.get(env_name)
        if not value:
            continue
        target = data
        for part in path[:-1]:
            target = target.setdefault(part, {})
        target[path[-1]] = value
