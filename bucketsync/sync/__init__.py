# bucketsync Sync Module
# Transfer state tracking and the copy, upload and download transfers

from bucketsync.sync.actions import ActionType, TransferAction, TransferReport
from bucketsync.sync.copier import BucketCopier
from bucketsync.sync.downloader import BucketDownloader
from bucketsync.sync.engine import RunResult, TransferEngine
from bucketsync.sync.keys import copy_key, copy_scope, copy_transaction, upload_key, upload_scope
from bucketsync.sync.state import (
    CONFIRMED,
    INVALIDATED,
    Confirmed,
    Fingerprint,
    Invalidated,
    Marker,
    StateManager,
    TransferState,
)
from bucketsync.sync.uploader import DirectoryUploader

__all__ = [
    # State
    "Marker",
    "Confirmed",
    "Fingerprint",
    "Invalidated",
    "CONFIRMED",
    "INVALIDATED",
    "TransferState",
    "StateManager",
    # Keys
    "copy_transaction",
    "copy_key",
    "copy_scope",
    "upload_key",
    "upload_scope",
    # Actions
    "ActionType",
    "TransferAction",
    "TransferReport",
    # Transfers
    "BucketCopier",
    "DirectoryUploader",
    "BucketDownloader",
    # Engine
    "TransferEngine",
    "RunResult",
]
