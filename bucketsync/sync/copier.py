# bucketsync Bucket Copier
# Copies objects missing from a target bucket

from bucketsync.config.schema import TransferDirection
from bucketsync.storage.base import HeadResult, StorageError
from bucketsync.sync.actions import ActionType, TransferAction, TransferReport
from bucketsync.sync.base import BaseTransfer
from bucketsync.sync.keys import copy_key, copy_scope
from bucketsync.sync.state import CONFIRMED, Confirmed
from bucketsync.utils.paths import normalize_prefix


class BucketCopier(BaseTransfer):
    """
    Copies every object under a source prefix that the target lacks.

    Objects recorded as confirmed are skipped without any storage call.
    Otherwise the target is probed; a present object is recorded, a
    missing one is copied server-side and then recorded.
    """

    def copy(
        self,
        source_bucket: str,
        target_bucket: str,
        prefix: str,
        *,
        invalidate: bool = False,
        name: str | None = None,
    ) -> TransferReport:
        """
        Copy a prefix from one bucket to another.

        Args:
            source_bucket: Bucket to copy from.
            target_bucket: Bucket to copy to (same keys).
            prefix: Source prefix, a trailing "/" is added if missing.
            invalidate: Clear recorded copies under the prefix first.
            name: Report name.

        Returns:
            TransferReport with one action per listed object.
        """
        list_prefix = normalize_prefix(prefix)
        report = TransferReport(
            name=name or f"copy {source_bucket}/{list_prefix} → {target_bucket}",
            direction=TransferDirection.COPY,
        )

        if invalidate:
            cleared = self.state_manager.invalidate(copy_scope(source_bucket, target_bucket, list_prefix))
            self.state_manager.persist()
            self.logger.info(f"Invalidated {cleared} recorded copies under {list_prefix or '<root>'}")

        try:
            listing = self.list_prefix(source_bucket, list_prefix)
        except StorageError as e:
            report.aborted = True
            report.error_message = f"Failed to copy folder: {e}"
            self.logger.error(report.error_message)
            return report

        for obj in listing:
            action = report.add(self._copy_one(source_bucket, target_bucket, obj.key))
            self.logger.action(action)

        return report

    def _copy_one(self, source_bucket: str, target_bucket: str, key: str) -> TransferAction:
        if not key:
            return TransferAction(key=key, action_type=ActionType.SKIPPED, reason="Empty key")

        transfer_key = copy_key(source_bucket, target_bucket, key)

        if isinstance(self.state_manager.get(transfer_key), Confirmed):
            return TransferAction(
                key=key,
                action_type=ActionType.CACHED,
                transfer_key=transfer_key,
                reason="Already copied and cached",
            )

        try:
            head = self.store.head_object(target_bucket, key)
        except StorageError as e:
            return TransferAction(
                key=key,
                action_type=ActionType.ERROR,
                transfer_key=transfer_key,
                error=f"Error checking object in target bucket: {e}",
            )

        if head == HeadResult.EXISTS:
            self.state_manager.record(transfer_key, CONFIRMED)
            return TransferAction(
                key=key,
                action_type=ActionType.EXISTS,
                transfer_key=transfer_key,
                reason=f"Already exists in {target_bucket}",
            )

        try:
            self.store.copy_object(source_bucket, key, target_bucket, key)
        except StorageError as e:
            return TransferAction(
                key=key,
                action_type=ActionType.ERROR,
                transfer_key=transfer_key,
                error=f"Copy failed: {e}",
            )

        self.state_manager.record(transfer_key, CONFIRMED)
        return TransferAction(
            key=key,
            action_type=ActionType.COPIED,
            transfer_key=transfer_key,
            reason=f"Copied to {target_bucket}",
        )
