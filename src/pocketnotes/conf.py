"""Locates the notes store on disk.

The store always lives in :data:`NOTES_DIR_NAME` inside the user's home directory; the names are constants rather
than user settings. :class:`StoreConf` carries the resolved location so the rest of the package never has to look
at the home directory itself.
"""

from __future__ import annotations
from dataclasses import dataclass
import logging
import os
import os.path

logger = logging.getLogger(__name__)

NOTES_DIR_NAME = '.my_notes'
"""Hidden directory, relative to the home directory, that holds the store."""

NOTES_FILE_NAME = 'notes.json'
"""Name of the single file holding every note."""


class StoreDirectoryError(Exception):
    """Raised when the store directory does not exist and cannot be created."""
    def __init__(self, message: str, path: str, cause: BaseException = None):
        super().__init__(message)
        self.message = message
        self.path = path
        self.cause = cause


def resolve_store_directory(home: str = None) -> str:
    """Returns the path of the store directory, creating it if necessary.

    ``home`` defaults to the current user's home directory. Only the final directory is created; the home directory
    itself must already exist.

    Raises :exc:`StoreDirectoryError` if the directory cannot be created, or if something other than a directory
    already occupies the path.
    """
    home = home if home is not None else os.path.expanduser('~')
    path = os.path.join(home, NOTES_DIR_NAME)
    if os.path.isdir(path):
        return path
    try:
        os.mkdir(path)
        logger.info('Created notes directory: %s', path)
    except FileExistsError:
        pass
    except OSError as e:
        raise StoreDirectoryError(f'Cannot create notes directory {path}: {e.strerror or e}', path, e) from e
    if not os.path.isdir(path):
        raise StoreDirectoryError(f'Notes directory path exists but is not a directory: {path}', path)
    return path


def resolve_store_file_path(home: str = None) -> str:
    """Returns the path of the store file, creating its directory if necessary.

    See :func:`resolve_store_directory`.
    """
    return os.path.join(resolve_store_directory(home), NOTES_FILE_NAME)


@dataclass
class StoreConf:
    """Identifies which store file the note operations read and write."""

    dir_path: str
    """Directory containing the store file. It is expected to exist already."""

    file_name: str = NOTES_FILE_NAME
    """Name of the store file within :attr:`dir_path`."""

    @property
    def file_path(self) -> str:
        return os.path.join(self.dir_path, self.file_name)

    @classmethod
    def for_user(cls) -> StoreConf:
        """Creates an instance for the current user's store, creating the store directory if needed.

        Raises :exc:`StoreDirectoryError` if that fails.
        """
        return cls(resolve_store_directory())

    def instantiate(self):
        from pocketnotes.api import Pocketnotes
        return Pocketnotes(self)
