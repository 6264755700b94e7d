"""bucketsync - one-way synchronization between buckets and directories.

Copies objects missing from a target bucket, uploads changed files from a
local directory and downloads bucket prefixes, recording completed
transfers in a local state file so repeated runs skip work already done.
"""

__version__ = "1.0.0"
__author__ = "Equitania Software GmbH"
__email__ = "info@equitania.de"

__all__ = [
    "__version__",
    "BucketsyncConfig",
    "load_config",
    "ObjectStore",
    "S3ObjectStore",
    "StorageError",
    "StateManager",
    "TransferState",
    "TransferEngine",
    "TransferReport",
    "BucketCopier",
    "DirectoryUploader",
    "BucketDownloader",
]


def __getattr__(name: str):
    """Lazy import to avoid loading dependencies during setup."""
    if name in ("BucketsyncConfig", "load_config"):
        from bucketsync import config

        return getattr(config, name)
    if name in ("ObjectStore", "S3ObjectStore", "StorageError"):
        from bucketsync import storage

        return getattr(storage, name)
    if name in (
        "StateManager",
        "TransferState",
        "TransferEngine",
        "TransferReport",
        "BucketCopier",
        "DirectoryUploader",
        "BucketDownloader",
    ):
        from bucketsync import sync

        return getattr(sync, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
