"""Write planned files to disk.

Files are written sequentially, creating parent directories as needed and
overwriting existing files unconditionally. Each file is replaced atomically
(temp file then rename) so a crash never leaves a half-written file, but
there is no transaction across files: if one write fails, files written
before it stay in place and the error propagates. Regenerating is
idempotent, so re-running is the recovery path.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Optional

from specquery.exceptions import OutputWriteError
from specquery.models import GeneratedFile
from specquery.output import debug


def write_files(files: list[GeneratedFile], out_dir: str | Path) -> list[Path]:
    """Write *files* under *out_dir*.

    Args:
        files: Planned files with paths relative to *out_dir*.
        out_dir: The output directory (created if missing).

    Returns:
        The paths written, in order.

    Raises:
        OutputWriteError: If a directory cannot be created or a file cannot
            be written.
    """
    root = Path(out_dir)
    written: list[Path] = []

    for generated in files:
        target = root / generated.path
        try:
            _atomic_write(target, generated.contents)
        except OSError as exc:
            raise OutputWriteError(f"Failed to write {target}: {exc}") from exc
        debug(f"Wrote {target}")
        written.append(target)

    return written


def _atomic_write(path: Path, data: str) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file is created in the same directory as *path* so that
    ``os.replace`` is an atomic rename on POSIX systems. On any failure the
    temp file is cleaned up.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
            newline="",
        )
        tmp_path = fd.name
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None
        os.chmod(tmp_path, 0o644)
        os.replace(tmp_path, path)
    except BaseException:
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise
