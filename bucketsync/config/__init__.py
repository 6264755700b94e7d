# bucketsync Configuration Module
# Handles YAML-based configuration loading, validation, and defaults

from bucketsync.config.defaults import DEFAULT_CONFIG, ENV_OVERRIDES, generate_default_config
from bucketsync.config.loader import (
    ensure_config_exists,
    get_config_path,
    load_config,
    save_config,
    validate_config_file,
)
from bucketsync.config.schema import (
    BucketsyncConfig,
    CopyJob,
    DownloadJob,
    OutputConfig,
    StorageConfig,
    TransferDirection,
    TransferJob,
    UploadJob,
)

__all__ = [
    # Schema
    "BucketsyncConfig",
    "StorageConfig",
    "OutputConfig",
    "CopyJob",
    "UploadJob",
    "DownloadJob",
    "TransferJob",
    "TransferDirection",
    # Loader
    "load_config",
    "save_config",
    "get_config_path",
    "ensure_config_exists",
    "validate_config_file",
    # Defaults
    "DEFAULT_CONFIG",
    "ENV_OVERRIDES",
    "generate_default_config",
]
