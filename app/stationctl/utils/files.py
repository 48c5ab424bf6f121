"""Atomic file writing.

Files are written to a temporary sibling in the same directory and then
published with os.replace(), so the target path only ever holds a complete
file. A crash mid-write leaves at most a stale ``*.tmp`` file behind.
"""

import os
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import IO


@contextmanager
def atomic_write(path: Path, mode: int = 0o600) -> Iterator[IO[bytes]]:
    """Open a temporary sibling of ``path`` for binary writing.

    On a clean exit from the ``with`` block the data is flushed to disk, the
    file permissions are set to ``mode`` and the temporary file replaces
    ``path`` in a single rename. On any error the temporary file is removed
    and the original ``path`` is left untouched.

    Args:
        path: Destination file.
        mode: Permission bits for the published file.

    Yields:
        Writable binary file handle.

    Raises:
        OSError: If the directory or file cannot be written.
    """
    path.parent.mkdir(mode=0o700, parents=True, exist_ok=True)

    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="wb",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as f:
            tmp_path = Path(f.name)
            yield f
            f.flush()
            os.fsync(f.fileno())
        os.chmod(tmp_path, mode)
        # os.replace() is atomic on POSIX when source and target share a filesystem
        os.replace(tmp_path, path)
    except BaseException:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise


def atomic_write_bytes(path: Path, data: bytes, mode: int = 0o600) -> Path:
    """Write ``data`` to ``path`` atomically.

    Args:
        path: Destination file.
        data: Content to write.
        mode: Permission bits for the published file.

    Returns:
        The destination path.

    Raises:
        OSError: If the file cannot be written.
    """
    with atomic_write(path, mode=mode) as f:
        f.write(data)
    return path
