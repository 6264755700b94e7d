# bucketsync Test Fixtures
# Pytest fixtures for bucketsync tests

import io
import tempfile
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path

import pytest
import yaml
from rich.console import Console

from bucketsync.logger import TransferLogger
from bucketsync.storage.base import ErrorKind, HeadResult, Listing, ObjectInfo, ObjectStore, StorageError
from bucketsync.sync.state import StateManager


class MemoryStore(ObjectStore):
    """In-memory object store recording every call."""

    def __init__(self, page_size: int = 1000):
        self.buckets: dict[str, dict[str, bytes]] = {}
        self.calls: list[tuple] = []
        self.page_size = page_size
        self.fail_list: set[str] = set()
        self.fail_head: set[str] = set()
        self.fail_copy: set[str] = set()
        self.fail_get: set[str] = set()
        self.fail_put: set[str] = set()

    def add(self, bucket: str, key: str, body: bytes = b"") -> None:
        self.buckets.setdefault(bucket, {})[key] = body

    def calls_of(self, operation: str) -> list[tuple]:
        return [call for call in self.calls if call[0] == operation]

    def list_objects(self, bucket: str, prefix: str, *, single_page: bool = False) -> Listing:
        self.calls.append(("list", bucket, prefix))
        if bucket in self.fail_list:
            raise StorageError(ErrorKind.NO_SUCH_BUCKET, f"List {bucket} failed")

        keys = sorted(k for k in self.buckets.get(bucket, {}) if k.startswith(prefix))
        truncated = False
        if single_page and len(keys) > self.page_size:
            keys = keys[: self.page_size]
            truncated = True

        objects = [ObjectInfo(key=k, size=len(self.buckets[bucket][k])) for k in keys]
        return Listing(bucket=bucket, prefix=prefix, objects=objects, truncated=truncated)

    def head_object(self, bucket: str, key: str) -> HeadResult:
        self.calls.append(("head", bucket, key))
        if key in self.fail_head:
            raise StorageError(ErrorKind.ACCESS_DENIED, f"Head {key} failed")
        return HeadResult.EXISTS if key in self.buckets.get(bucket, {}) else HeadResult.NOT_FOUND

    def copy_object(self, source_bucket: str, source_key: str, target_bucket: str, target_key: str) -> None:
        self.calls.append(("copy", f"{source_bucket}/{source_key}", target_bucket, target_key))
        if source_key in self.fail_copy:
            raise StorageError(ErrorKind.UNEXPECTED, f"Copy {source_key} failed")
        self.add(target_bucket, target_key, self.buckets[source_bucket][source_key])

    @contextmanager
    def open_object(self, bucket: str, key: str):
        self.calls.append(("get", bucket, key))
        if key in self.fail_get:
            raise StorageError(ErrorKind.UNEXPECTED, f"Get {key} failed")
        yield io.BytesIO(self.buckets[bucket][key])

    def put_object(self, bucket: str, key: str, body: bytes) -> None:
        self.calls.append(("put", bucket, key))
        if key in self.fail_put:
            raise StorageError(ErrorKind.UNEXPECTED, f"Put {key} failed")
        self.add(bucket, key, body)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_home(temp_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Create a temporary home directory and clear storage variables."""
    home = temp_dir / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(temp_dir)
    for name in (
        "S3_LOCATION",
        "S3_ID",
        "S3_SECRET",
        "S3_ENDPOINT",
        "S3_BUCKET_DEV",
        "S3_BUCKET_PROD",
        "BUCKETSYNC_STATE_FILE",
        "BUCKETSYNC_CONFIG",
    ):
        monkeypatch.delenv(name, raising=False)
    return home


@pytest.fixture
def output() -> io.StringIO:
    """Buffer receiving console output."""
    return io.StringIO()


@pytest.fixture
def logger(output: io.StringIO) -> TransferLogger:
    """Logger writing to a buffer."""
    return TransferLogger(Console(file=output, width=200, no_color=True), verbose=True)


@pytest.fixture
def store() -> MemoryStore:
    """Empty in-memory object store."""
    return MemoryStore()


@pytest.fixture
def state_file(temp_dir: Path) -> Path:
    """Create a state file path."""
    return temp_dir / "state" / "localCache.json"


@pytest.fixture
def state_manager(state_file: Path, logger: TransferLogger) -> StateManager:
    """State manager on a fresh state file."""
    return StateManager(state_file, logger=logger)


@pytest.fixture
def local_dir(temp_dir: Path) -> Path:
    """Local directory with a few files."""
    root = temp_dir / "images"
    (root / "icons").mkdir(parents=True)
    (root / "a.txt").write_bytes(b"hello")
    (root / "b.png").write_bytes(b"\x89PNG fake")
    (root / "icons" / "c.svg").write_text("<svg/>", encoding="utf-8")
    return root


@pytest.fixture
def sample_config(temp_dir: Path) -> dict:
    """Create sample configuration dict."""
    return {
        "storage": {"region": "eu-central-1"},
        "source_bucket": "dev",
        "target_bucket": "prod",
        "state_file": str(temp_dir / "localCache.json"),
        "jobs": [
            {"kind": "copy", "prefix": "images"},
            {"kind": "upload", "local_dir": str(temp_dir / "images"), "prefix": "images"},
            {"kind": "download", "prefix": "images", "local_dir": str(temp_dir / "download")},
        ],
        "output": {"verbose": False, "colored": False},
    }


@pytest.fixture
def config_file(temp_home: Path, sample_config: dict) -> Path:
    """Create a configuration file."""
    config_dir = temp_home / ".config" / "bucketsync"
    config_dir.mkdir(parents=True)
    config_path = config_dir / "config.yaml"

    with open(config_path, "w", encoding="utf-8") as f:
        yaml.dump(sample_config, f, default_flow_style=False)

    return config_path
