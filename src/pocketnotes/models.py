"""Defines the :class:`Note` entity and the helpers for creating, upgrading, and ordering notes.

Records read from the store are loosely typed (see :data:`RawNote`). :func:`migrate_record` is the one place that
turns such a record into a :class:`Note`, filling in whatever older or hand-edited records are missing.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone
import logging
from typing import Any, Container, Dict, Iterable, List, Optional, Set

import shortuuid

logger = logging.getLogger(__name__)

ID_LENGTH = 8
"""Number of characters in a note id."""

FIELDS = ('id', 'title', 'description', 'created_at')
"""Known keys of a persisted note, in the order they are written."""

RawNote = Dict[str, Any]
"""A note record as found in the store file, before normalization."""

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def new_id(taken: Container[str] = ()) -> str:
    """Returns a short random id that is not in ``taken``.

    The id is the first :data:`ID_LENGTH` characters of a shortuuid, so collisions are unlikely but possible;
    a candidate that is already taken is simply regenerated.
    """
    while True:
        candidate = shortuuid.uuid()[:ID_LENGTH]
        if candidate not in taken:
            return candidate
        logger.debug('Generated id %s is already in use; trying another', candidate)


def now_timestamp() -> str:
    """Returns the current UTC time as an ISO-8601 string with millisecond precision, e.g. 2024-05-02T03:04:05.000Z"""
    return datetime.now(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parses an ISO-8601 timestamp into a timezone-aware datetime.

    A trailing ``Z`` is accepted. Timestamps without an offset are taken to be in local time.
    Returns None if the value is missing or cannot be parsed.
    """
    if not value or not isinstance(value, str):
        return None
    text = value.strip()
    if text.endswith(('Z', 'z')):
        text = text[:-1] + '+00:00'
    try:
        parsed = datetime.fromisoformat(text)
        if parsed.tzinfo is None:
            parsed = parsed.astimezone()
    except (ValueError, OverflowError):
        return None
    return parsed


def format_timestamp(value: Optional[str]) -> str:
    """Renders a timestamp in local time for display, falling back to the raw value if it cannot be parsed."""
    if not value:
        return 'N/A'
    parsed = parse_timestamp(value)
    if parsed is None:
        return value
    try:
        return parsed.astimezone().strftime('%Y-%m-%d %H:%M:%S')
    except (ValueError, OverflowError):
        return value


@dataclass
class Note:
    """A single note, as stored in the notes file."""

    id: str
    """Short unique identifier, see :func:`new_id`. Never changes once assigned."""

    title: str
    """Required when creating a note, but may be empty on records that were edited by hand."""

    description: str = ''

    created_at: str = ''
    """ISO-8601 creation timestamp. This is the only sort key for listing notes."""

    extra: Dict[str, Any] = field(default_factory=dict)
    """Any other keys found on the stored record. They are written back unchanged."""

    def created(self) -> Optional[datetime]:
        """Returns :attr:`created_at` parsed by :func:`parse_timestamp`, or None if it is not a valid timestamp."""
        return parse_timestamp(self.created_at)

    def as_json(self) -> dict:
        """Returns a dict representing the instance, suitable for serializing as json.

        The known fields always come first, in the order given by :data:`FIELDS`.
        """
        result = {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'created_at': self.created_at,
        }
        for k, v in self.extra.items():
            result.setdefault(k, v)
        return result


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, (int, float)):
        return str(value)
    return None


def migrate_record(raw: RawNote, taken: Set[str]) -> Note:
    """Converts a stored record into a :class:`Note`, backfilling fields that older records lack.

    * A missing or empty ``created_at`` is set to the current time.
    * A missing or empty ``id`` is set to a new id that is not in ``taken``.
    * A missing ``title`` or ``description`` becomes an empty string.

    Numbers and booleans are converted to strings; other non-string values for the known fields are treated
    as missing. ``taken`` is not modified.
    """
    note_id = _text(raw.get('id'))
    if not note_id:
        note_id = new_id(taken)
        logger.debug('Assigned id %s to a note that had none', note_id)
    created_at = _text(raw.get('created_at'))
    if not created_at:
        created_at = now_timestamp()
        logger.debug('Assigned created_at %s to note %s', created_at, note_id)
    return Note(id=note_id,
                title=_text(raw.get('title')) or '',
                description=_text(raw.get('description')) or '',
                created_at=created_at,
                extra={k: v for k, v in raw.items() if k not in FIELDS})


def migrate_records(raws: Iterable[RawNote]) -> List[Note]:
    """Applies :func:`migrate_record` to each record.

    Ids assigned during migration are distinct from every other id in the batch. Duplicate ids that are already
    present in the records are left as they are.
    """
    raws = list(raws)
    taken = {_text(r.get('id')) for r in raws} - {None, ''}
    notes = []
    for raw in raws:
        note = migrate_record(raw, taken)
        taken.add(note.id)
        notes.append(note)
    return notes


def sort_by_recency(notes: Iterable[Note]) -> List[Note]:
    """Returns the notes ordered by :attr:`Note.created_at`, most recent first.

    The sort is stable. Notes whose timestamp cannot be parsed come after all the others, in their original order.
    """
    def key(note: Note):
        created = note.created()
        return (created is not None, created or _EPOCH)
    return sorted(notes, key=key, reverse=True)
