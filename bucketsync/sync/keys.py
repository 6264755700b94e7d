# bucketsync Transfer Keys
# Composite keys under which transfers are recorded

from bucketsync.utils.paths import KEY_SEPARATOR, join_key

COPY_TRANSACTION_SEPARATOR = "T"


def copy_transaction(source_bucket: str, target_bucket: str) -> str:
    """Transaction identifier for a bucket pair, e.g. ``devTprod``."""
    return f"{source_bucket}{COPY_TRANSACTION_SEPARATOR}{target_bucket}"


def copy_key(source_bucket: str, target_bucket: str, object_key: str) -> str:
    """Key recording that an object was copied: ``{source}T{target}/{objectKey}``."""
    return f"{copy_transaction(source_bucket, target_bucket)}{KEY_SEPARATOR}{object_key}"


def upload_key(bucket: str, object_key: str) -> str:
    """Key recording the fingerprint of an uploaded file: ``{bucket}/{objectKey}``."""
    return f"{bucket}{KEY_SEPARATOR}{object_key}"


def copy_scope(source_bucket: str, target_bucket: str, prefix: str = "") -> str:
    """Subtree holding every copy of a bucket pair under a prefix."""
    return join_key(copy_transaction(source_bucket, target_bucket), prefix)


def upload_scope(bucket: str, prefix: str = "") -> str:
    """Subtree holding every upload to a bucket under a prefix."""
    return join_key(bucket, prefix)
