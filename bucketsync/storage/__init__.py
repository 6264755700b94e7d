# bucketsync Storage Module
# Object store abstraction and its boto3 implementation

from bucketsync.storage.base import (
    ErrorKind,
    HeadResult,
    Listing,
    ObjectInfo,
    ObjectStore,
    StorageError,
)
from bucketsync.storage.s3 import S3ObjectStore, create_client, create_store, credentials_available

__all__ = [
    # Base
    "ObjectStore",
    "ObjectInfo",
    "Listing",
    "HeadResult",
    "ErrorKind",
    "StorageError",
    # S3
    "S3ObjectStore",
    "create_client",
    "create_store",
    "credentials_available",
]
