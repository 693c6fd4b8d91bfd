"""Provides the main entry point for using the library, :class:`Pocketnotes`"""

from __future__ import annotations
import logging
from typing import List, Tuple

from pocketnotes.conf import StoreConf
from pocketnotes.models import Note, new_id, now_timestamp, sort_by_recency
from pocketnotes.store import NoteStore

logger = logging.getLogger(__name__)


class Pocketnotes:
    """Creates, lists, and deletes notes in a store.

    Generally, you should get an instance using the :meth:`Pocketnotes.for_user` method. Every method loads the
    whole store from disk and, if it changes anything, writes the whole store back, so instances hold no state
    besides the location of the store.

    .. attribute:: conf
       :type: pocketnotes.conf.StoreConf

    .. attribute:: store
       :type: pocketnotes.store.NoteStore

    Here's an example that deletes every note titled "scratch":

    .. code-block:: python

       from pocketnotes.api import Pocketnotes
       pn = Pocketnotes.for_user()
       for note in pn.notes():
           if note.title == 'scratch':
               pn.delete(note.id)

    Nothing prevents another process from changing the store between a load and the following save; if that
    happens, the later save wins.
    """

    @staticmethod
    def for_user() -> Pocketnotes:
        """Creates an instance for the store in the user's home directory, creating its directory if needed.

        Raises :exc:`pocketnotes.conf.StoreDirectoryError` if the directory cannot be created.
        """
        return StoreConf.for_user().instantiate()

    def __init__(self, conf: StoreConf):
        self.conf = conf
        self.store = NoteStore(conf.file_path)

    def create(self, title: str, description: str = '') -> Tuple[Note, bool]:
        """Adds a new note with a fresh id and the current time as its creation date.

        Raises :exc:`ValueError` if the title is empty; in that case the store is not touched.

        Returns the new note, and whether it was saved successfully.
        """
        if not title:
            raise ValueError('A note requires a non-empty title.')
        notes = self.store.load()
        note = Note(id=new_id({n.id for n in notes}),
                    title=title,
                    description=description or '',
                    created_at=now_timestamp())
        notes.append(note)
        saved = self.store.save(notes)
        if saved:
            logger.debug('Created note %s', note.id)
        return note, saved

    def notes(self) -> List[Note]:
        """Returns all notes, most recently created first.

        If some notes have creation dates that cannot be parsed, a warning is logged once and those notes are
        placed last.
        """
        notes = self.store.load()
        if any(n.created() is None for n in notes):
            logger.warning("Some notes have invalid 'created_at' dates. Sorting might be inconsistent.")
        return sort_by_recency(notes)

    def delete(self, note_id: str) -> Tuple[int, bool]:
        """Removes every note whose id equals the given id.

        The store is only rewritten if something was removed.

        Returns the number of notes removed, and whether the store is up to date (True if there was nothing to
        save, False if saving failed).
        """
        notes = self.store.load()
        remaining = [n for n in notes if not n.id == note_id]
        removed = len(notes) - len(remaining)
        if not removed:
            return 0, True
        return removed, self.store.save(remaining)
