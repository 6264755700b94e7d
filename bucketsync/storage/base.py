# bucketsync Object Store
# Storage client abstraction injected into every transfer

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import BinaryIO, ContextManager, Optional


class HeadResult(str, Enum):
    """Outcome of an existence probe."""

    EXISTS = "exists"
    NOT_FOUND = "not_found"


class ErrorKind(str, Enum):
    """Classification of storage faults."""

    NOT_FOUND = "not_found"
    NO_SUCH_BUCKET = "no_such_bucket"
    ACCESS_DENIED = "access_denied"
    CREDENTIALS = "credentials"
    UNEXPECTED = "unexpected"


class StorageError(Exception):
    """A failed storage operation."""

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    def __str__(self) -> str:
        return f"{self.message} ({self.kind.value})"


@dataclass
class ObjectInfo:
    """Minimal metadata of a listed object."""

    key: str
    size: int = 0
    etag: Optional[str] = None

    @property
    def is_placeholder(self) -> bool:
        """Keys ending in the separator stand for directories."""
        return self.key.endswith("/")


@dataclass
class Listing:
    """Objects returned by a listing call."""

    bucket: str
    prefix: str
    objects: list[ObjectInfo] = field(default_factory=list)
    truncated: bool = False

    def __iter__(self):
        return iter(self.objects)

    def __len__(self) -> int:
        return len(self.objects)


class ObjectStore(ABC):
    """
    Operations the transfers need from an object storage service.

    Every method raises StorageError on failure. Existence probes return
    HeadResult.NOT_FOUND instead of raising.
    """

    @abstractmethod
    def list_objects(self, bucket: str, prefix: str, *, single_page: bool = False) -> Listing:
        """List objects under a prefix, following pagination unless single_page."""

    @abstractmethod
    def head_object(self, bucket: str, key: str) -> HeadResult:
        """Check whether an object exists."""

    @abstractmethod
    def copy_object(self, source_bucket: str, source_key: str, target_bucket: str, target_key: str) -> None:
        """Server-side copy of one object."""

    @abstractmethod
    def open_object(self, bucket: str, key: str) -> ContextManager[BinaryIO]:
        """Open an object body as a readable binary stream."""

    @abstractmethod
    def put_object(self, bucket: str, key: str, body: bytes) -> None:
        """Store an object from a byte buffer."""
