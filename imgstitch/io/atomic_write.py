from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Callable, Union


PathLike = Union[str, Path]


def _fsync_path(path: Path) -> None:
    """
    Best-effort fsync of a file or directory by path.
    Directories cannot be opened on every platform; that is not an error.
    """
    try:
        fd = os.open(str(path), os.O_RDONLY)
    except OSError:
        return
    try:
        os.fsync(fd)
    except OSError:
        pass
    finally:
        os.close(fd)


def atomic_write_with(path: PathLike, writer: Callable[[Path], None]) -> Path:
    """
    Produce `path` through `writer(tmp_path)` so that readers only ever see
    the old file or the complete new one:
      - the temp file lives next to `path` (same filesystem, so os.replace is atomic)
      - it is fsynced before the rename, the directory after it
      - if `writer` raises, the temp file is removed and the error propagates

    Meant for "save to filename" APIs such as Pillow's Image.save, which must
    be given an explicit format because the temp name ends in ".tmp".
    """
    dst = Path(path)
    parent = dst.parent
    parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(dir=str(parent), prefix=dst.name + ".", suffix=".tmp")
    os.close(fd)
    tmp_path = Path(tmp_name)

    try:
        writer(tmp_path)
        _fsync_path(tmp_path)
        os.replace(tmp_path, dst)
        _fsync_path(parent)
    finally:
        if tmp_path.exists():
            tmp_path.unlink()

    return dst
