# cmpkg_tool/utils/file_utils.py
"""File operation utilities"""

import logging
import os
import zipfile
from pathlib import Path
from typing import Iterable, List

logger = logging.getLogger(__name__)


def list_file_names(directory: Path) -> List[str]:
    """
    List the names of the regular files in a directory (not recursive)

    Args:
        directory: Directory to list

    Returns:
        Sorted file names
    """
    return sorted(p.name for p in Path(directory).iterdir() if p.is_file())


def format_size(size: int) -> str:
    """
    Format file size in human-readable format

    Args:
        size: Size in bytes

    Returns:
        Formatted size string
    """
    for unit in ['B', 'KB', 'MB', 'GB']:
        if size < 1024.0:
            return f"{size:.2f} {unit}"
        size /= 1024.0
    return f"{size:.2f} TB"


def ensure_directory(directory: Path) -> Path:
    """Create a directory (and parents) if needed"""
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def delete_with_prefix(directory: Path, prefix: str, suffix: str = "") -> List[Path]:
    """
    Delete files whose name starts with prefix and ends with suffix

    Matching is case-insensitive.

    Args:
        directory: Directory to clean
        prefix: File name prefix
        suffix: File name suffix

    Returns:
        Deleted paths
    """
    directory = Path(directory)
    if not directory.is_dir():
        return []

    prefix = prefix.lower()
    suffix = suffix.lower()
    deleted = []

    for path in sorted(directory.iterdir()):
        name = path.name.lower()
        if path.is_file() and name.startswith(prefix) and name.endswith(suffix):
            path.unlink()
            logger.debug(f"Deleted {path}")
            deleted.append(path)

    return deleted


def relative_name(path: Path, base: Path) -> str:
    """Get a path relative to base with forward slashes"""
    return str(Path(path).relative_to(base)).replace(os.sep, '/')


def create_zip(source_dir: Path, names: Iterable[str], output_file: Path) -> List[str]:
    """
    Create a zip archive from files of a directory

    Each name is both the path relative to source_dir and the entry name in
    the archive. Missing files are skipped.

    Args:
        source_dir: Directory holding the files
        names: Relative file names, in archive order
        output_file: Archive to create (overwritten)

    Returns:
        Names actually written to the archive
    """
    source_dir = Path(source_dir)
    output_file = Path(output_file)
    output_file.parent.mkdir(parents=True, exist_ok=True)

    written = []
    with zipfile.ZipFile(output_file, 'w', compression=zipfile.ZIP_DEFLATED) as zf:
        for name in names:
            file_path = source_dir / name
            if not file_path.is_file():
                logger.warning(f"Skipping missing file: {file_path}")
                continue
            zf.write(file_path, arcname=name)
            written.append(name)

    return written
