# bucketsync Default Configuration
# Default configuration as Python dict and YAML template

from typing import Any

DEFAULT_CONFIG: dict[str, Any] = {
    "storage": {
        "region": "us-east-1",
    },
    "source_bucket": None,
    "target_bucket": None,
    "state_file": "localCache.json",
    "single_page": False,
    "jobs": [],
    "output": {
        "verbose": False,
        "colored": True,
    },
}

# Environment variables read once at startup, mapped to config paths
ENV_OVERRIDES: dict[str, tuple[str, ...]] = {
    "S3_LOCATION": ("storage", "region"),
    "S3_ID": ("storage", "access_key_id"),
    "S3_SECRET": ("storage", "secret_access_key"),
    "S3_ENDPOINT": ("storage", "endpoint_url"),
    "S3_BUCKET_DEV": ("source_bucket",),
    "S3_BUCKET_PROD": ("target_bucket",),
    "BUCKETSYNC_STATE_FILE": ("state_file",),
}


def generate_default_config() -> str:
    """
    Generate the default configuration file content.

    Credentials are intentionally left out; they are read from the
    environment (or a .env file).
    """
    return """\
# bucketsync configuration
#
# Credentials and bucket names may also come from the environment
# (or a .env file): S3_LOCATION, S3_ID, S3_SECRET, S3_ENDPOINT,
# S3_BUCKET_DEV (source), S3_BUCKET_PROD (target).

storage:
  region: us-east-1
  # endpoint_url: https://s3.example.com

# source_bucket: my-dev-bucket
# target_bucket: my-prod-bucket

# Records which objects were already transferred
state_file: localCache.json

# Only process the first page of each listing (at most 1000 objects)
single_page: false

# Jobs run by 'bucketsync run', in order
jobs: []
#  - kind: copy
#    prefix: images
#  - kind: upload
#    local_dir: ./images
#    prefix: images
#    invalidate: false
#  - kind: download
#    prefix: images
#    local_dir: ./images

output:
  verbose: false
  colored: true
"""
