# bucketsync Directory Uploader
# Uploads local files whose content changed since the last upload

from pathlib import Path

from bucketsync.config.schema import TransferDirection
from bucketsync.storage.base import StorageError
from bucketsync.sync.actions import ActionType, TransferAction, TransferReport
from bucketsync.sync.base import BaseTransfer
from bucketsync.sync.keys import upload_key, upload_scope
from bucketsync.sync.state import Fingerprint
from bucketsync.utils.hashing import file_hash
from bucketsync.utils.paths import iter_files, to_object_key


class DirectoryUploader(BaseTransfer):
    """
    Uploads every file under a local directory whose fingerprint differs
    from the recorded one, persisting state after each upload.
    """

    def upload(
        self,
        local_dir: Path,
        bucket: str,
        prefix: str = "",
        *,
        invalidate: bool = False,
        name: str | None = None,
    ) -> TransferReport:
        """
        Upload changed files.

        Args:
            local_dir: Directory to upload recursively.
            bucket: Destination bucket.
            prefix: Remote prefix the files are placed under.
            invalidate: Clear recorded fingerprints under the prefix before
                comparing, forcing those files to be uploaded again.
            name: Report name.

        Returns:
            TransferReport with one action per local file.
        """
        root = Path(local_dir)
        report = TransferReport(
            name=name or f"upload {root} → {bucket}/{prefix}",
            direction=TransferDirection.UPLOAD,
        )

        state_path = self.state_manager.state_path.resolve()
        try:
            # The state file changes on every persist and is never uploaded
            files = [path for path in iter_files(root) if path.resolve() != state_path]
        except OSError as e:
            report.aborted = True
            report.error_message = f"Failed to list local directory '{root}': {e}"
            self.logger.error(report.error_message)
            return report

        if invalidate:
            scope = upload_scope(bucket, prefix)
            cleared = self.state_manager.invalidate(scope)
            self.state_manager.persist()
            self.logger.info(f"Invalidated {cleared} recorded fingerprints under {scope}")

        for path in files:
            action = report.add(self._upload_one(root, path, bucket, prefix))
            self.logger.action(action)

        return report

    def _upload_one(self, root: Path, path: Path, bucket: str, prefix: str) -> TransferAction:
        object_key = to_object_key(path, root, prefix)
        transfer_key = upload_key(bucket, object_key)

        try:
            fingerprint = file_hash(path)
        except OSError as e:
            return TransferAction(
                key=object_key,
                action_type=ActionType.ERROR,
                transfer_key=transfer_key,
                error=f"Failed to read {path}: {e}",
            )

        if fingerprint is None:
            return TransferAction(
                key=object_key,
                action_type=ActionType.ERROR,
                transfer_key=transfer_key,
                error=f"File disappeared: {path}",
            )

        marker = self.state_manager.get(transfer_key)
        if marker is not None and marker.matches(fingerprint):
            return TransferAction(
                key=object_key,
                action_type=ActionType.UNCHANGED,
                transfer_key=transfer_key,
                reason="Already uploaded",
            )

        try:
            self.store.put_object(bucket, object_key, path.read_bytes())
        except (OSError, StorageError) as e:
            return TransferAction(
                key=object_key,
                action_type=ActionType.ERROR,
                transfer_key=transfer_key,
                error=f"Failed to upload {path}: {e}",
            )

        self.state_manager.record(transfer_key, Fingerprint(fingerprint))
        return TransferAction(
            key=object_key,
            action_type=ActionType.UPLOADED,
            transfer_key=transfer_key,
            reason=f"Uploaded {path}",
        )
