# bucketsync Configuration Schema
# Pydantic models for YAML configuration validation

from enum import Enum
from pathlib import Path
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, field_validator


class TransferDirection(str, Enum):
    """Kind of transfer a job performs."""

    COPY = "copy"
    UPLOAD = "upload"
    DOWNLOAD = "download"


class StorageConfig(BaseModel):
    """Object storage endpoint and credentials."""

    region: str | None = Field(default=None, description="Storage region (S3_LOCATION)")
    access_key_id: str | None = Field(default=None, description="Access key ID (S3_ID)")
    secret_access_key: str | None = Field(default=None, description="Secret access key (S3_SECRET)")
    endpoint_url: str | None = Field(default=None, description="Custom endpoint for S3-compatible services")

    @property
    def has_credentials(self) -> bool:
        """Check if an explicit key pair is configured."""
        return bool(self.access_key_id and self.secret_access_key)


class CopyJob(BaseModel):
    """Copy objects missing from the target bucket."""

    kind: Literal["copy"] = "copy"
    name: str | None = Field(default=None, description="Display name")
    prefix: str = Field(description="Source prefix to copy")
    source_bucket: str | None = Field(default=None, description="Overrides the global source bucket")
    target_bucket: str | None = Field(default=None, description="Overrides the global target bucket")
    invalidate: bool = Field(default=False, description="Clear recorded copies under the prefix first")


class UploadJob(BaseModel):
    """Upload changed files from a local directory."""

    kind: Literal["upload"] = "upload"
    name: str | None = Field(default=None, description="Display name")
    local_dir: str = Field(description="Local directory to upload")
    bucket: str | None = Field(default=None, description="Overrides the global source bucket")
    prefix: str = Field(default="", description="Remote prefix the files are placed under")
    invalidate: bool = Field(default=False, description="Clear recorded fingerprints under the prefix first")

    @field_validator("local_dir")
    @classmethod
    def expand_local_dir(cls, v: str) -> str:
        """Expand ~ in path."""
        return str(Path(v).expanduser())


class DownloadJob(BaseModel):
    """Download every object under a prefix."""

    kind: Literal["download"] = "download"
    name: str | None = Field(default=None, description="Display name")
    prefix: str = Field(description="Remote prefix to download")
    local_dir: str = Field(description="Local directory to write to")
    bucket: str | None = Field(default=None, description="Overrides the global source bucket")

    @field_validator("local_dir")
    @classmethod
    def expand_local_dir(cls, v: str) -> str:
        """Expand ~ in path."""
        return str(Path(v).expanduser())


TransferJob = Annotated[Union[CopyJob, UploadJob, DownloadJob], Field(discriminator="kind")]


class OutputConfig(BaseModel):
    """Output settings."""

    verbose: bool = Field(default=False, description="Enable verbose output")
    colored: bool = Field(default=True, description="Enable colored output")


class BucketsyncConfig(BaseModel):
    """Root configuration model for bucketsync."""

    storage: StorageConfig = Field(default_factory=StorageConfig, description="Storage settings")
    source_bucket: str | None = Field(default=None, description="Default source bucket (S3_BUCKET_DEV)")
    target_bucket: str | None = Field(default=None, description="Default target bucket (S3_BUCKET_PROD)")
    state_file: str = Field(default="localCache.json", description="Transfer state file")
    single_page: bool = Field(
        default=False, description="Only process the first page of every listing (legacy behavior)"
    )
    jobs: list[TransferJob] = Field(default_factory=list, description="Jobs executed by 'bucketsync run'")
    output: OutputConfig = Field(default_factory=OutputConfig, description="Output settings")

    @field_validator("state_file")
    @classmethod
    def expand_state_file(cls, v: str) -> str:
        """Expand ~ in path."""
        return str(Path(v).expanduser())

    def require_source_bucket(self, override: str | None = None) -> str:
        """Resolve the source bucket, raising if none is configured."""
        bucket = override or self.source_bucket
        if not bucket:
            raise ValueError("No source bucket configured (set source_bucket or S3_BUCKET_DEV)")
        return bucket

    def require_target_bucket(self, override: str | None = None) -> str:
        """Resolve the target bucket, raising if none is configured."""
        bucket = override or self.target_bucket
        if not bucket:
            raise ValueError("No target bucket configured (set target_bucket or S3_BUCKET_PROD)")
        return bucket
