# bucketsync Utilities Module
# Helper functions for path handling and content hashing

from bucketsync.utils.hashing import (
    FINGERPRINT_LENGTH,
    content_hash,
    file_hash,
    is_fingerprint,
)
from bucketsync.utils.paths import (
    KEY_SEPARATOR,
    atomic_write,
    ensure_dir,
    iter_files,
    join_key,
    local_path_for_key,
    normalize_prefix,
    to_object_key,
)

__all__ = [
    # Paths
    "KEY_SEPARATOR",
    "ensure_dir",
    "atomic_write",
    "iter_files",
    "normalize_prefix",
    "join_key",
    "to_object_key",
    "local_path_for_key",
    # Hashing
    "FINGERPRINT_LENGTH",
    "content_hash",
    "file_hash",
    "is_fingerprint",
]
