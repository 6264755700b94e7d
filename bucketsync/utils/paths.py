# bucketsync Path Utilities
# Local file walking, object key mapping and atomic writes

import os
import tempfile
from collections.abc import Iterator
from pathlib import Path

KEY_SEPARATOR = "/"


def ensure_dir(path: Path) -> Path:
    """Ensure directory exists, creating if necessary."""
    path.mkdir(parents=True, exist_ok=True)
    return path


def atomic_write(path: Path, content: str | bytes, *, encoding: str = "utf-8") -> None:
    """
    Atomically write content to file.

    Uses a temporary file in the target directory and a rename.

    Args:
        path: Target file path.
        content: Content to write (str or bytes).
        encoding: Encoding for string content (default utf-8).
    """
    ensure_dir(path.parent)

    fd, temp_path = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        if isinstance(content, str):
            with os.fdopen(fd, "w", encoding=encoding) as f:
                f.write(content)
        else:
            with os.fdopen(fd, "wb") as f:
                f.write(content)
        os.replace(temp_path, path)
    except Exception:
        try:
            os.unlink(temp_path)
        except OSError:
            pass
        raise


def iter_files(root: Path) -> Iterator[Path]:
    """
    Recursively yield every regular file under root.

    Directories are traversed but never yielded. Order is sorted by
    relative path so repeated runs visit files identically.

    Raises:
        FileNotFoundError: If root doesn't exist or isn't a directory.
    """
    if not root.is_dir():
        raise FileNotFoundError(f"Local directory not found: {root}")

    yield from sorted((p for p in root.rglob("*") if p.is_file()), key=lambda p: p.relative_to(root).as_posix())


def normalize_prefix(prefix: str) -> str:
    """
    Normalize a listing prefix so it ends with the key separator.

    An empty prefix stays empty (whole bucket).
    """
    if not prefix:
        return ""
    return prefix if prefix.endswith(KEY_SEPARATOR) else f"{prefix}{KEY_SEPARATOR}"


def join_key(*parts: str) -> str:
    """Join key parts with the separator, skipping empty parts."""
    cleaned = [part.strip(KEY_SEPARATOR) for part in parts if part and part.strip(KEY_SEPARATOR)]
    return KEY_SEPARATOR.join(cleaned)


def to_object_key(path: Path, root: Path, prefix: str = "") -> str:
    """
    Map a local file to its object key.

    Args:
        path: File below root.
        root: Local directory being uploaded.
        prefix: Optional remote prefix the files are placed under.

    Returns:
        Relative path with forward slashes, under prefix when given.
    """
    relative = path.relative_to(root).as_posix()
    return join_key(prefix, relative) if prefix else relative


def local_path_for_key(key: str, prefix: str, root: Path) -> Path:
    """
    Map an object key to a local file path below root.

    The listing prefix is stripped from the start of the key.

    Raises:
        ValueError: If the key would resolve outside root.
    """
    relative = key[len(prefix) :] if prefix and key.startswith(prefix) else key
    relative = relative.lstrip(KEY_SEPARATOR)
    if not relative:
        raise ValueError(f"Object key has no name below prefix: {key}")

    target = root.joinpath(*relative.split(KEY_SEPARATOR))
    resolved_root = root.resolve()
    if resolved_root != target.resolve() and resolved_root not in target.resolve().parents:
        raise ValueError(f"Object key escapes local directory: {key}")
    return target
