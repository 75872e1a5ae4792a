"""Icon repository checkout and directory bookkeeping.

These are the boundary steps around extraction: clone the icon repository,
drop everything from the clone except the icons directory, recreate the
output directory, and remove the clone afterwards.
"""

import logging
import os
import shutil

import sh

from iconx.errors import RepositoryError
from iconx.file_utils import DIR_PERMISSIONS


logger = logging.getLogger(__name__)


def remove_path(path: str) -> None:
    """Remove a file, symlink or directory tree. Missing paths are ignored."""
    if os.path.islink(path) or os.path.isfile(path):
        os.unlink(path)
    elif os.path.isdir(path):
        shutil.rmtree(path)


def get_git() -> sh.Command:
    try:
        return sh.Command('git')
    except sh.CommandNotFound as e:
        raise RepositoryError(
            'git not found. Install it:\n'
            '  macOS: brew install git\n'
            '  Ubuntu/Debian: apt install git'
        ) from e


def clone_repository(repo_url: str, clone_dir: str) -> None:
    """Shallow-clone repo_url into clone_dir, replacing any previous clone.

    Raises:
        RepositoryError: If git is missing or the clone fails
        OSError: If a previous clone cannot be removed
    """
    logger.info(f'Cloning icon repository {repo_url}...')

    try:
        remove_path(clone_dir)
    except OSError as e:
        raise OSError(f'failed to remove existing clone directory: {e}') from e

    git = get_git()
    try:
        git('clone', '--depth', '1', repo_url, clone_dir, _err_to_out=True)
    except sh.ErrorReturnCode as e:
        output = e.stdout.decode('utf-8', errors='replace').strip()
        raise RepositoryError(f'failed to clone repository: exit code {e.exit_code}\nOutput: {output}') from e

    logger.info('Repository cloned successfully')


def trim_clone(clone_dir: str, icons_dir: str) -> None:
    """Remove everything from the clone except the icons directory.

    Entries that cannot be removed are logged and left in place.

    Raises:
        RepositoryError: If the icons directory is missing from the clone
        OSError: If the clone directory cannot be listed
    """
    logger.info('Cleaning up cloned repository...')

    icons_path = os.path.join(clone_dir, icons_dir)
    if not os.path.isdir(icons_path):
        raise RepositoryError('icons directory not found in cloned repository')

    for name in os.listdir(clone_dir):
        if name == icons_dir:
            continue
        entry_path = os.path.join(clone_dir, name)
        try:
            remove_path(entry_path)
        except OSError as e:
            logger.warning(f'Failed to remove {entry_path}: {e}')

    logger.info('Cleanup completed')


def prepare_output_dir(output_dir: str) -> None:
    """Recreate output_dir empty.

    Raises:
        OSError: If the old directory cannot be removed or the new one created
    """
    try:
        remove_path(output_dir)
    except OSError as e:
        raise OSError(f'failed to remove existing output directory: {e}') from e

    try:
        os.makedirs(output_dir, mode=DIR_PERMISSIONS, exist_ok=True)
    except OSError as e:
        raise OSError(f'failed to create output directory: {e}') from e

    logger.info(f'Output directory created: {output_dir}')


def cleanup_clone(clone_dir: str) -> None:
    """Remove the temporary clone.

    Raises:
        OSError: If the clone cannot be removed
    """
    logger.info('Cleaning up temporary files...')
    try:
        remove_path(clone_dir)
    except OSError as e:
        raise OSError(f'failed to cleanup clone directory: {e}') from e
    logger.info('Cleanup completed')
