"""Settings emitter: persists the migration settings document.

The document is written to a temporary file beside the target and moved
into place with os.replace, so readers never observe a half-written file.
"""

import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import Sequence

from .errors import AlreadyExistsError, SettingsWriteError
from .models import MigrationSettingsDocument, PlanAllocation

logger = logging.getLogger(__name__)


def check_output_path(output_path: str | Path, overwrite: bool) -> Path:
    """Return the absolute output path, refusing to clobber unless allowed.

    Raises:
        AlreadyExistsError: The file exists and overwrite is False.
    """
    path = Path(output_path).expanduser().absolute()
    if path.exists() and not overwrite:
        raise AlreadyExistsError(path)
    return path


def _target_mode(path: Path) -> int:
    """Permission bits for the settings file: keep an existing file's mode,
    otherwise what a plain open() would create under the current umask."""
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def emit(
    allocations: Sequence[PlanAllocation],
    output_path: str | Path,
    overwrite: bool = False,
) -> Path:
    """Write the settings document and return its absolute path.

    Raises:
        AlreadyExistsError: The file exists and overwrite is False.
        SettingsWriteError: The file could not be written.
    """
    path = check_output_path(output_path, overwrite)
    payload = MigrationSettingsDocument(list(allocations)).to_json()

    tmp_name = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
        )
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(payload)
            f.flush()
            os.fsync(f.fileno())
        # mkstemp creates the file owner-only
        os.chmod(tmp_name, _target_mode(path))
        os.replace(tmp_name, path)
    except OSError as e:
        if tmp_name and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise SettingsWriteError(f"Failed to write migration settings to {path}: {e}") from e

    logger.info("Wrote %d plan(s) to %s", len(allocations), path)
    return path
