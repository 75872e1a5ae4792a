"""File scanning and copying helpers"""

import contextlib
import logging
import os
import shutil
import tempfile

from iconx.models import Job


logger = logging.getLogger(__name__)

SVG_EXTENSION = '.svg'
DIR_PERMISSIONS = 0o755
FILE_PERMISSIONS = 0o644


def is_svg_file(filename: str) -> bool:
    """Check the extension only; content is never inspected."""
    return os.path.splitext(filename)[1].lower() == SVG_EXTENSION


def find_svg_files(root: str) -> list[str]:
    """Recursively collect SVG files under root.

    Traversal is pre-order and keeps entries in the order the directory
    listing returns them (no sorting). Symlinked directories are not followed.

    Args:
        root: Directory to scan

    Returns:
        Paths of all SVG files in the subtree, in traversal order

    Raises:
        OSError: If root or any descendant directory cannot be read. The scan
            is aborted and no partial result is returned.
    """
    svg_files: list[str] = []
    _walk(root, svg_files)
    return svg_files


def _walk(directory: str, svg_files: list[str]) -> None:
    with os.scandir(directory) as entries:
        for entry in entries:
            if entry.is_dir(follow_symlinks=False):
                _walk(entry.path, svg_files)
            elif entry.is_file() and is_svg_file(entry.name):
                svg_files.append(entry.path)


def copy_file(src: str, dst: str) -> int:
    """Copy src to dst byte for byte, replacing dst if it exists.

    Bytes go to a temporary file next to dst which is renamed into place only
    after the copy completed, so dst never holds a partial copy.

    Returns:
        Number of bytes copied

    Raises:
        OSError: On any read, write or rename failure (temp file is removed)
    """
    dst_dir = os.path.dirname(os.path.abspath(dst))
    fd, tmp_path = tempfile.mkstemp(dir=dst_dir, prefix='.iconx-', suffix='.tmp')
    try:
        with os.fdopen(fd, 'wb') as dest, open(src, 'rb') as source:
            shutil.copyfileobj(source, dest)
            size = dest.tell()
        os.chmod(tmp_path, FILE_PERMISSIONS)
        os.replace(tmp_path, dst)
    except BaseException:
        with contextlib.suppress(OSError):
            os.unlink(tmp_path)
        raise
    return size


def list_tech_directories(icons_path: str) -> list[Job]:
    """Create one Job per immediate subdirectory of the icon root.

    Plain files at the top level are ignored. Order is the listing order.

    Raises:
        OSError: If the icon root cannot be read
    """
    jobs = []
    with os.scandir(icons_path) as entries:
        for entry in entries:
            if entry.is_dir(follow_symlinks=False):
                jobs.append(Job(tech_name=entry.name, tech_path=entry.path))
    logger.debug(f'Found {len(jobs)} technology directories in {icons_path}')
    return jobs
