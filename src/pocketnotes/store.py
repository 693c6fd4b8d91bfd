"""Reads and writes the JSON file that holds every note.

The file is a JSON array of objects and is always rewritten in full. Reading is forgiving: a missing, empty,
unreadable, or corrupt file loads as an empty list, and the problem is logged rather than raised.
"""

from __future__ import annotations
import json
import logging
import os.path
from typing import List, Optional, Tuple, Union

from pocketnotes.models import Note, migrate_records

logger = logging.getLogger(__name__)


class ParseError(Exception):
    """Describes store file contents that cannot be interpreted as a list of notes."""
    def __init__(self, message: str, path: str = None, cause: BaseException = None):
        super().__init__(message)
        self.message = message
        self.path = path
        self.cause = cause


def parse_notes(content: Union[str, bytes], path: str = None) -> Tuple[List[Note], Optional[ParseError]]:
    """Parses the contents of a store file.

    Returns the notes and None on success, or an empty list and a :exc:`ParseError` describing the problem.
    Records are normalized with :func:`pocketnotes.models.migrate_records`. Array elements that are not objects
    are skipped, with a warning.
    """
    try:
        data = json.loads(content)
    except (ValueError, RecursionError) as e:
        return [], ParseError(f'Invalid JSON: {e}', path, e)
    if not isinstance(data, list):
        return [], ParseError(f'Expected a JSON array of notes but found {type(data).__name__}', path)
    records = []
    for i, item in enumerate(data):
        if isinstance(item, dict):
            records.append(item)
        else:
            logger.warning('Skipping entry %d in notes file because it is not an object: %r', i, item)
    return migrate_records(records), None


def dump_notes(notes: List[Note]) -> str:
    """Serializes notes in the store file format: a JSON array indented by four spaces."""
    return json.dumps([n.as_json() for n in notes], indent=4, ensure_ascii=False) + '\n'


class NoteStore:
    """Loads and saves the full list of notes in a single file.

    .. attribute:: path
       :type: str

       The store file. Its directory must already exist; see :mod:`pocketnotes.conf`.
    """
    def __init__(self, path: str):
        self.path = path

    def load(self) -> List[Note]:
        """Returns every note in the store.

        Returns an empty list if the file does not exist or is empty. If the file cannot be read or parsed, the
        problem is logged and an empty list is returned; the file is left untouched until the next :meth:`save`,
        which overwrites it.
        """
        try:
            if not os.path.isfile(self.path) or os.path.getsize(self.path) == 0:
                return []
            with open(self.path, 'rb') as file:
                content = file.read()
        except OSError as e:
            logger.error('An error occurred while loading notes: %s', e)
            return []
        notes, error = parse_notes(content, self.path)
        if error:
            logger.warning("Notes file '%s' is corrupted. Starting with an empty list.", os.path.basename(self.path))
            logger.debug('Parse failure for %s: %s', self.path, error.message)
            return []
        logger.debug('Loaded %d notes from %s', len(notes), self.path)
        return notes

    def save(self, notes: List[Note]) -> bool:
        """Replaces the contents of the store with the given notes.

        Returns True on success. If the notes cannot be encoded or the file cannot be written, the error is logged
        and False is returned. Encoding happens before the file is opened, so an unencodable note leaves the
        existing file untouched.
        """
        try:
            data = dump_notes(notes).encode('utf-8')
            with open(self.path, 'wb') as file:
                file.write(data)
        except (OSError, UnicodeError) as e:
            logger.error('An error occurred while saving notes: %s', e)
            return False
        logger.debug('Saved %d notes to %s', len(notes), self.path)
        return True
