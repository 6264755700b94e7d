# bucketsync Transfer Base
# Shared plumbing for the copier, uploader and downloader

from typing import Optional

from bucketsync.logger import TransferLogger
from bucketsync.storage.base import Listing, ObjectStore
from bucketsync.sync.state import StateManager


class BaseTransfer:
    """
    Common dependencies of a transfer.

    The object store is always injected; nothing here creates clients.
    """

    def __init__(
        self,
        store: ObjectStore,
        state_manager: Optional[StateManager] = None,
        logger: Optional[TransferLogger] = None,
        *,
        single_page: bool = False,
    ):
        """
        Initialize transfer.

        Args:
            store: Object store used for every remote call.
            state_manager: Transfer state (not used by downloads).
            logger: Output sink for every message.
            single_page: Only process the first page of listings.
        """
        self.store = store
        self.logger = logger or TransferLogger()
        self.state_manager = state_manager or StateManager(logger=self.logger)
        self.single_page = single_page

    def list_prefix(self, bucket: str, prefix: str) -> Listing:
        """
        List a prefix, warning when a single-page listing was cut short.

        Raises:
            StorageError: If the listing call fails.
        """
        listing = self.store.list_objects(bucket, prefix, single_page=self.single_page)
        if listing.truncated:
            self.logger.warning(
                f"Listing of {bucket}/{prefix} returned only the first page ({len(listing)} objects); "
                "remaining objects are not processed"
            )
        return listing
