# bucketsync S3 Store
# boto3 implementation of the object store

from contextlib import contextmanager
from typing import Any, BinaryIO, Iterator, Optional

import boto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError, NoCredentialsError, PartialCredentialsError

from bucketsync.config.schema import StorageConfig
from bucketsync.storage.base import ErrorKind, HeadResult, Listing, ObjectInfo, ObjectStore, StorageError

NOT_FOUND_CODES = {"404", "NoSuchKey", "NotFound"}
NO_SUCH_BUCKET_CODES = {"NoSuchBucket"}
ACCESS_DENIED_CODES = {"403", "AccessDenied", "Forbidden"}
CREDENTIAL_CODES = {"InvalidAccessKeyId", "SignatureDoesNotMatch", "ExpiredToken"}


def classify_client_error(error: ClientError) -> ErrorKind:
    """Map a botocore ClientError to an ErrorKind."""
    code = str(error.response.get("Error", {}).get("Code", ""))
    status = error.response.get("ResponseMetadata", {}).get("HTTPStatusCode")

    if code in NO_SUCH_BUCKET_CODES:
        return ErrorKind.NO_SUCH_BUCKET
    if code in NOT_FOUND_CODES or status == 404:
        return ErrorKind.NOT_FOUND
    if code in ACCESS_DENIED_CODES or status == 403:
        return ErrorKind.ACCESS_DENIED
    if code in CREDENTIAL_CODES:
        return ErrorKind.CREDENTIALS
    return ErrorKind.UNEXPECTED


def to_storage_error(error: Exception, operation: str) -> StorageError:
    """Wrap a boto3/botocore exception."""
    if isinstance(error, ClientError):
        message = error.response.get("Error", {}).get("Message") or str(error)
        return StorageError(classify_client_error(error), f"{operation} failed: {message}")
    if isinstance(error, (NoCredentialsError, PartialCredentialsError)):
        return StorageError(ErrorKind.CREDENTIALS, f"{operation} failed: {error}")
    return StorageError(ErrorKind.UNEXPECTED, f"{operation} failed: {error}")


class S3ObjectStore(ObjectStore):
    """Object store backed by a boto3 S3 client."""

    def __init__(self, client: Any):
        """
        Initialize store.

        Args:
            client: boto3 S3 client (or a compatible stand-in).
        """
        self.client = client

    def list_objects(self, bucket: str, prefix: str, *, single_page: bool = False) -> Listing:
        listing = Listing(bucket=bucket, prefix=prefix)
        params = {"Bucket": bucket, "Prefix": prefix}

        try:
            if single_page:
                pages = [self.client.list_objects_v2(**params)]
            else:
                pages = self.client.get_paginator("list_objects_v2").paginate(**params)

            for page in pages:
                for item in page.get("Contents", []):
                    listing.objects.append(
                        ObjectInfo(
                            key=item.get("Key", ""),
                            size=item.get("Size", 0),
                            etag=(item.get("ETag") or "").strip('"') or None,
                        )
                    )
                if single_page:
                    listing.truncated = bool(page.get("IsTruncated", False))
        except (ClientError, BotoCoreError) as e:
            raise to_storage_error(e, f"List s3://{bucket}/{prefix}") from e

        return listing

    def head_object(self, bucket: str, key: str) -> HeadResult:
        try:
            self.client.head_object(Bucket=bucket, Key=key)
        except ClientError as e:
            if classify_client_error(e) == ErrorKind.NOT_FOUND:
                return HeadResult.NOT_FOUND
            raise to_storage_error(e, f"Head s3://{bucket}/{key}") from e
        except BotoCoreError as e:
            raise to_storage_error(e, f"Head s3://{bucket}/{key}") from e
        return HeadResult.EXISTS

    def copy_object(self, source_bucket: str, source_key: str, target_bucket: str, target_key: str) -> None:
        try:
            self.client.copy_object(
                Bucket=target_bucket,
                Key=target_key,
                CopySource={"Bucket": source_bucket, "Key": source_key},
            )
        except (ClientError, BotoCoreError) as e:
            raise to_storage_error(e, f"Copy s3://{source_bucket}/{source_key} -> s3://{target_bucket}/{target_key}") from e

    @contextmanager
    def open_object(self, bucket: str, key: str) -> Iterator[BinaryIO]:
        try:
            response = self.client.get_object(Bucket=bucket, Key=key)
        except (ClientError, BotoCoreError) as e:
            raise to_storage_error(e, f"Get s3://{bucket}/{key}") from e

        body = response["Body"]
        try:
            yield body
        finally:
            body.close()

    def put_object(self, bucket: str, key: str, body: bytes) -> None:
        try:
            self.client.put_object(Bucket=bucket, Key=key, Body=body)
        except (ClientError, BotoCoreError) as e:
            raise to_storage_error(e, f"Put s3://{bucket}/{key}") from e


def create_client(storage: StorageConfig, *, session: Optional[boto3.session.Session] = None) -> Any:
    """
    Build a boto3 S3 client from explicit settings.

    Missing credentials fall back to the boto3 default chain.
    """
    session = session or boto3.session.Session()
    kwargs: dict[str, Any] = {
        "region_name": storage.region,
        "config": BotoConfig(signature_version="s3v4", retries={"max_attempts": 1, "mode": "standard"}),
    }
    if storage.endpoint_url:
        kwargs["endpoint_url"] = storage.endpoint_url
    if storage.access_key_id and storage.secret_access_key:
        kwargs["aws_access_key_id"] = storage.access_key_id
        kwargs["aws_secret_access_key"] = storage.secret_access_key
    return session.client("s3", **kwargs)


def create_store(storage: StorageConfig) -> S3ObjectStore:
    """Create an S3 object store from storage settings."""
    return S3ObjectStore(create_client(storage))


def credentials_available(storage: StorageConfig, *, session: Optional[boto3.session.Session] = None) -> bool:
    """Check that explicit keys are set or the boto3 default chain resolves some."""
    if storage.has_credentials:
        return True
    session = session or boto3.session.Session()
    return session.get_credentials() is not None
