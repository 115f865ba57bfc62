"""Path resolution relative to a referencing file."""

import os
from pathlib import Path, PureWindowsPath


def is_absolute_path(path: str | Path) -> bool:
    """Check for an absolute path in either POSIX or Windows form.

    Package results are usually produced on the Windows host running IIS, so
    ``C:\\packages\\site.zip`` and ``\\\\share\\packages\\site.zip`` count as
    absolute on any platform.
    """
    return Path(path).is_absolute() or PureWindowsPath(str(path)).is_absolute()


def resolve_relative_to(path: str | Path, base_file: str | Path) -> Path:
    """Resolve a path against the directory containing base_file.

    Absolute paths are returned unchanged. A relative base_file is first made
    absolute against the current working directory. ``..`` segments are
    collapsed lexically; symlinks are not followed.

    Examples:
        resolve_relative_to("app1/site.zip", "/data/results.json")
            -> Path("/data/app1/site.zip")
        resolve_relative_to("/abs/site.zip", "/data/results.json")
            -> Path("/abs/site.zip")
    """
    if is_absolute_path(path):
        return Path(path)

    base_dir = Path(base_file).parent
    if not base_dir.is_absolute():
        base_dir = Path.cwd() / base_dir
    return Path(os.path.normpath(base_dir / Path(path)))
