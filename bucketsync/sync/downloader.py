# bucketsync Bucket Downloader
# Mirrors a bucket prefix into a local directory

import shutil
from pathlib import Path

from bucketsync.config.schema import TransferDirection
from bucketsync.storage.base import ObjectInfo, StorageError
from bucketsync.sync.actions import ActionType, TransferAction, TransferReport
from bucketsync.sync.base import BaseTransfer
from bucketsync.utils.paths import ensure_dir, local_path_for_key, normalize_prefix


class BucketDownloader(BaseTransfer):
    """
    Downloads every object under a prefix.

    No state is consulted; each run downloads everything again. An
    interrupted write leaves a truncated file behind.
    """

    def download(self, bucket: str, prefix: str, local_dir: Path, *, name: str | None = None) -> TransferReport:
        """
        Download a prefix.

        Args:
            bucket: Bucket to download from.
            prefix: Remote prefix, stripped from the local paths.
            local_dir: Local directory to write to.
            name: Report name.

        Returns:
            TransferReport with one action per listed object.
        """
        root = Path(local_dir)
        list_prefix = normalize_prefix(prefix)
        report = TransferReport(
            name=name or f"download {bucket}/{list_prefix} → {root}",
            direction=TransferDirection.DOWNLOAD,
        )

        try:
            listing = self.list_prefix(bucket, list_prefix)
        except StorageError as e:
            report.aborted = True
            report.error_message = f"Failed to list objects in folder '{list_prefix}': {e}"
            self.logger.error(report.error_message)
            return report

        if not listing:
            self.logger.info("No objects found.")
            return report

        for obj in listing:
            action = report.add(self._download_one(bucket, list_prefix, root, obj))
            self.logger.action(action)

        return report

    def _download_one(self, bucket: str, prefix: str, root: Path, obj: ObjectInfo) -> TransferAction:
        if not obj.key or obj.is_placeholder:
            return TransferAction(key=obj.key, action_type=ActionType.SKIPPED, reason="Directory placeholder")

        try:
            target = local_path_for_key(obj.key, prefix, root)
        except ValueError as e:
            return TransferAction(key=obj.key, action_type=ActionType.ERROR, error=str(e))

        try:
            ensure_dir(target.parent)
            with self.store.open_object(bucket, obj.key) as body, open(target, "wb") as f:
                shutil.copyfileobj(body, f)
        except (OSError, StorageError) as e:
            return TransferAction(
                key=obj.key,
                action_type=ActionType.ERROR,
                error=f"Failed to download {obj.key}: {e}",
            )

        return TransferAction(key=obj.key, action_type=ActionType.DOWNLOADED, reason=f"Written to {target}")
