# bucketsync Transfer Engine
# Runs configured copy, upload and download jobs

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from bucketsync.config.schema import BucketsyncConfig, CopyJob, DownloadJob, TransferJob, UploadJob
from bucketsync.logger import TransferLogger
from bucketsync.storage.base import ObjectStore
from bucketsync.sync.actions import TransferReport
from bucketsync.sync.copier import BucketCopier
from bucketsync.sync.downloader import BucketDownloader
from bucketsync.sync.state import StateManager
from bucketsync.sync.uploader import DirectoryUploader


@dataclass
class RunResult:
    """Result of running several jobs."""

    reports: list[TransferReport] = field(default_factory=list)

    @property
    def completed_jobs(self) -> int:
        return sum(1 for report in self.reports if not report.aborted)

    @property
    def transferred(self) -> int:
        return sum(report.transferred for report in self.reports)

    @property
    def errors(self) -> int:
        return sum(report.errors for report in self.reports) + sum(1 for r in self.reports if r.aborted)

    @property
    def success(self) -> bool:
        return all(report.success for report in self.reports)


class TransferEngine:
    """
    Main transfer engine.

    Resolves bucket names from the configuration and hands each job to
    the matching transfer, sharing one store, state and logger.
    """

    def __init__(
        self,
        config: BucketsyncConfig,
        store: ObjectStore,
        state_manager: StateManager | None = None,
        logger: TransferLogger | None = None,
    ):
        """
        Initialize transfer engine.

        Args:
            config: bucketsync configuration.
            store: Object store for all remote calls.
            state_manager: Optional state manager (uses config.state_file if not provided).
            logger: Optional logger.
        """
        self.config = config
        self.store = store
        self.logger = logger or TransferLogger(verbose=config.output.verbose)
        self.state_manager = state_manager or StateManager(Path(config.state_file), logger=self.logger)

        options = {"single_page": config.single_page}
        self.copier = BucketCopier(store, self.state_manager, self.logger, **options)
        self.uploader = DirectoryUploader(store, self.state_manager, self.logger, **options)
        self.downloader = BucketDownloader(store, self.state_manager, self.logger, **options)

    def copy(
        self,
        prefix: str,
        *,
        source_bucket: Optional[str] = None,
        target_bucket: Optional[str] = None,
        invalidate: bool = False,
        name: Optional[str] = None,
    ) -> TransferReport:
        """
        Copy a prefix from the source to the target bucket.

        Raises:
            ValueError: If a bucket is neither given nor configured.
        """
        return self.copier.copy(
            self.config.require_source_bucket(source_bucket),
            self.config.require_target_bucket(target_bucket),
            prefix,
            invalidate=invalidate,
            name=name,
        )

    def upload(
        self,
        local_dir: Path,
        *,
        bucket: Optional[str] = None,
        prefix: str = "",
        invalidate: bool = False,
        name: Optional[str] = None,
    ) -> TransferReport:
        """
        Upload changed files to a bucket (the source bucket by default).

        Raises:
            ValueError: If no bucket is given or configured.
        """
        return self.uploader.upload(
            Path(local_dir),
            self.config.require_source_bucket(bucket),
            prefix,
            invalidate=invalidate,
            name=name,
        )

    def download(
        self,
        prefix: str,
        local_dir: Path,
        *,
        bucket: Optional[str] = None,
        name: Optional[str] = None,
    ) -> TransferReport:
        """
        Download a prefix of a bucket (the source bucket by default).

        Raises:
            ValueError: If no bucket is given or configured.
        """
        return self.downloader.download(
            self.config.require_source_bucket(bucket),
            prefix,
            Path(local_dir),
            name=name,
        )

    def run_job(self, job: TransferJob) -> TransferReport:
        """Run a single configured job."""
        if isinstance(job, CopyJob):
            return self.copy(
                job.prefix,
                source_bucket=job.source_bucket,
                target_bucket=job.target_bucket,
                invalidate=job.invalidate,
                name=job.name,
            )
        if isinstance(job, UploadJob):
            return self.upload(
                Path(job.local_dir),
                bucket=job.bucket,
                prefix=job.prefix,
                invalidate=job.invalidate,
                name=job.name,
            )
        if isinstance(job, DownloadJob):
            return self.download(job.prefix, Path(job.local_dir), bucket=job.bucket, name=job.name)
        raise TypeError(f"Unknown job type: {type(job).__name__}")

    def run_all(self) -> RunResult:
        """Run every configured job in order."""
        result = RunResult()
        for job in self.config.jobs:
            result.reports.append(self.run_job(job))
        return result
