# bucketsync Transfer State
# Tracks which objects were already transferred between runs

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterator, Optional, Union

from bucketsync.logger import TransferLogger
from bucketsync.utils.paths import KEY_SEPARATOR, atomic_write

DEFAULT_STATE_FILE = "localCache.json"


@dataclass(frozen=True)
class Confirmed:
    """Object confirmed present at the destination."""

    def matches(self, fingerprint: Optional[str]) -> bool:
        return False

    def to_json(self) -> Any:
        return True


@dataclass(frozen=True)
class Fingerprint:
    """Content fingerprint of the last uploaded version."""

    digest: str

    def matches(self, fingerprint: Optional[str]) -> bool:
        return fingerprint is not None and self.digest == fingerprint

    def to_json(self) -> Any:
        return self.digest


@dataclass(frozen=True)
class Invalidated:
    """Explicitly cleared entry; never matches anything."""

    def matches(self, fingerprint: Optional[str]) -> bool:
        return False

    def to_json(self) -> Any:
        return ""


Marker = Union[Confirmed, Fingerprint, Invalidated]

CONFIRMED = Confirmed()
INVALIDATED = Invalidated()


def marker_from_json(value: Any) -> Optional[Marker]:
    """
    Decode a leaf of the state file.

    `true` is a confirmed copy, a non-empty string a fingerprint and an
    empty string an invalidated entry. Anything else is treated as absent.
    """
    if value is True:
        return CONFIRMED
    if isinstance(value, str):
        return Fingerprint(value) if value else INVALIDATED
    return None


def split_key(key: str) -> list[str]:
    """Split a transfer key into its segments."""
    return key.split(KEY_SEPARATOR)


class TransferState:
    """
    In-memory transfer state.

    A flat mapping of transfer key to marker. No key is ever a segment-wise
    prefix of another key, so the mapping always converts to the nested
    tree written to disk: setting a key drops its ancestors and its
    descendants, the same way overwriting a tree node would.
    """

    def __init__(self, entries: Optional[dict[str, Marker]] = None):
        self._entries: dict[str, Marker] = {}
        for key, marker in (entries or {}).items():
            self.set(key, marker)

    def get(self, key: str) -> Optional[Marker]:
        """Get the marker recorded for a key, or None."""
        return self._entries.get(key)

    def set(self, key: str, marker: Marker) -> None:
        """Set or overwrite the marker for a key."""
        if not key:
            raise ValueError("Transfer key must not be empty")

        segments = split_key(key)
        for i in range(1, len(segments)):
            self._entries.pop(KEY_SEPARATOR.join(segments[:i]), None)
        self._drop_descendants(key)
        self._entries[key] = marker

    def invalidate(self, key: str) -> int:
        """
        Replace a key and its whole subtree with an invalidated marker.

        Returns:
            Number of recorded entries that were cleared.
        """
        cleared = len(self._descendants(key)) + (1 if key in self._entries else 0)
        self.set(key, INVALIDATED)
        return cleared

    def remove(self, key: str) -> int:
        """Remove a key and its subtree. Returns number of entries removed."""
        removed = self._drop_descendants(key)
        if self._entries.pop(key, None) is not None:
            removed += 1
        return removed

    def clear(self) -> None:
        """Remove all entries."""
        self._entries.clear()

    def keys(self, prefix: str = "") -> list[str]:
        """Sorted keys, optionally limited to a key and its subtree."""
        if not prefix:
            return sorted(self._entries)
        return sorted(k for k in self._entries if k == prefix or k.startswith(prefix + KEY_SEPARATOR))

    def items(self) -> Iterator[tuple[str, Marker]]:
        for key in sorted(self._entries):
            yield key, self._entries[key]

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TransferState):
            return NotImplemented
        return self._entries == other._entries

    def to_tree(self) -> dict[str, Any]:
        """Convert to the nested mapping written to disk."""
        tree: dict[str, Any] = {}
        for key, marker in self.items():
            segments = split_key(key)
            node = tree
            for part in segments[:-1]:
                child = node.get(part)
                if not isinstance(child, dict):
                    child = {}
                    node[part] = child
                node = child
            node[segments[-1]] = marker.to_json()
        return tree

    @classmethod
    def from_tree(cls, tree: dict[str, Any]) -> "TransferState":
        """Create from the nested mapping read from disk."""
        state = cls()
        state._load_node(tree, [])
        return state

    def _load_node(self, node: dict[str, Any], path: list[str]) -> None:
        for part, value in node.items():
            segments = path + [str(part)]
            if isinstance(value, dict):
                self._load_node(value, segments)
                continue
            marker = marker_from_json(value)
            if marker is not None:
                self._entries[KEY_SEPARATOR.join(segments)] = marker

    def _descendants(self, key: str) -> list[str]:
        prefix = key + KEY_SEPARATOR
        return [k for k in self._entries if k.startswith(prefix)]

    def _drop_descendants(self, key: str) -> int:
        descendants = self._descendants(key)
        for k in descendants:
            del self._entries[k]
        return len(descendants)


class StateManager:
    """
    Manages transfer state persistence.

    Loading never fails: a missing or unreadable file yields an empty
    state. Persisting never raises: a failed write is logged and the run
    continues with the in-memory state.
    """

    def __init__(self, state_path: Optional[Path] = None, logger: Optional[TransferLogger] = None):
        """
        Initialize state manager.

        Args:
            state_path: Path to state file. Defaults to ./localCache.json
            logger: Logger for state file faults.
        """
        self.state_path = state_path if state_path is not None else Path(DEFAULT_STATE_FILE)
        self.logger = logger or TransferLogger()
        self._state: Optional[TransferState] = None

    @property
    def state(self) -> TransferState:
        """Get current state, loading if necessary."""
        if self._state is None:
            self._state = self.load()
        return self._state

    def load(self) -> TransferState:
        """Load state from file."""
        if not self.state_path.exists():
            return TransferState()

        try:
            data = json.loads(self.state_path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            self.logger.warning(f"Could not read state file {self.state_path}: {e}. Starting with empty state.")
            return TransferState()

        if not isinstance(data, dict):
            self.logger.warning(f"State file {self.state_path} is not a mapping. Starting with empty state.")
            return TransferState()

        return TransferState.from_tree(data)

    def persist(self) -> bool:
        """
        Write the full state to file.

        Returns:
            True if the file was written.
        """
        content = json.dumps(self.state.to_tree(), indent=2, ensure_ascii=False)
        try:
            atomic_write(self.state_path, content + "\n")
        except OSError as e:
            self.logger.error(f"Error writing state file {self.state_path}: {e}")
            return False
        return True

    def get(self, key: str) -> Optional[Marker]:
        """Get the marker recorded for a key."""
        return self.state.get(key)

    def set(self, key: str, marker: Marker) -> None:
        """Set a marker in memory. Call persist() to make it durable."""
        self.state.set(key, marker)

    def record(self, key: str, marker: Marker) -> bool:
        """Set a marker and persist immediately."""
        self.state.set(key, marker)
        return self.persist()

    def invalidate(self, key: str) -> int:
        """Invalidate a key and its subtree in memory."""
        return self.state.invalidate(key)

    def remove(self, key: str) -> int:
        """Remove a key and its subtree in memory."""
        return self.state.remove(key)

    def reset(self) -> None:
        """Reset state to empty and persist."""
        self._state = TransferState()
        self.persist()
