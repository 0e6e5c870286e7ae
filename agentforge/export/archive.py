"""Package an exported file set into a zip archive.

Entries are written in insertion order with a fixed timestamp and fixed
permissions, so identical file sets always produce identical bytes.
"""

import asyncio
import io
import logging
import os
import tempfile
import zipfile
from pathlib import Path
from typing import Mapping

logger = logging.getLogger(__name__)


class ArchiveError(Exception):
    """Raised when a file set cannot be packaged."""
    pass


# earliest timestamp the zip format can store
ZIP_EPOCH = (1980, 1, 1, 0, 0, 0)
FILE_MODE = 0o644


def _entry(path: str) -> zipfile.ZipInfo:
    info = zipfile.ZipInfo(filename=path, date_time=ZIP_EPOCH)
    info.compress_type = zipfile.ZIP_DEFLATED
    info.external_attr = FILE_MODE << 16
    return info


def assemble(files: Mapping[str, str]) -> bytes:
    """Build a zip archive from ``{path: text}`` pairs.

    File contents are stored as UTF-8 and never inspected.

    Raises:
        ArchiveError: if the archive cannot be built. No partial bytes are
            returned.
    """
    buffer = io.BytesIO()
    try:
        with zipfile.ZipFile(buffer, mode="w") as archive:
            for path, content in files.items():
                archive.writestr(_entry(path), content.encode("utf-8"))
    except (ValueError, OSError, MemoryError, zipfile.LargeZipFile) as e:
        raise ArchiveError(f"Failed to assemble archive: {e}") from e

    data = buffer.getvalue()
    logger.debug("assembled archive with %d entries (%d bytes)", len(files), len(data))
    return data


async def assemble_async(files: Mapping[str, str]) -> bytes:
    """Non-blocking variant of :func:`assemble` for use inside an event loop."""
    return await asyncio.to_thread(assemble, dict(files))


def write_archive(files: Mapping[str, str], path: Path | str) -> Path:
    """Assemble ``files`` and write the archive to ``path``.

    The archive is written to a temporary file next to ``path`` and then
    renamed, so an interrupted write never leaves a partial archive behind.

    Raises:
        ArchiveError: if assembly or the write fails.
    """
    path = Path(path)
    data = assemble(files)

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    except OSError as e:
        raise ArchiveError(f"Failed to write archive to {path}: {e}") from e

    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        os.replace(tmp_name, path)
    except OSError as e:
        Path(tmp_name).unlink(missing_ok=True)
        raise ArchiveError(f"Failed to write archive to {path}: {e}") from e

    return path
