"""Command-line interface for pocketnotes."""


import argparse
import json
import logging
import sys
from terminaltables import AsciiTable
from pocketnotes.api import Pocketnotes
from pocketnotes.conf import StoreDirectoryError
from pocketnotes.models import Note, format_timestamp


CREATE_USAGE = 'pocketnotes create "Your Title" [--desc "Your description"]'
DELETE_USAGE = 'pocketnotes delete <note_id>'
COMMANDS = ('create', 'list', 'delete')

logger = logging.getLogger(__name__)


class _CliFormatter(logging.Formatter):
    """Prints informational messages as-is, and prefixes warnings and errors with their severity."""
    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        if record.levelno >= logging.ERROR:
            return f'Error: {message}'
        if record.levelno >= logging.WARNING:
            return f'Warning: {message}'
        return message


def _configure_logging(verbose: bool) -> None:
    logger = logging.getLogger('pocketnotes')
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(_CliFormatter('%(message)s'))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)


def _print_note(note: Note) -> None:
    print(f'ID: {note.id or "N/A"}')
    print(f'Title: {note.title or "No Title"}')
    print(f'Description: {note.description or "No Description"}')
    print(f'Created: {format_timestamp(note.created_at)}')
    print('-' * 20)


def _create(args, pn: Pocketnotes) -> int:
    note, saved = pn.create(args.title, args.desc or '')
    if not saved:
        return 1
    print(f"Note '{note.title}' (ID: {note.id}) created successfully.")
    return 0


def _list(args, pn: Pocketnotes) -> int:
    notes = pn.notes()
    if args.json:
        print(json.dumps([n.as_json() for n in notes], ensure_ascii=False))
        return 0
    if not notes:
        print('No notes found.')
        return 0
    if args.table:
        data = [('ID', 'Title', 'Description', 'Created')]
        data += [(n.id, n.title, n.description, format_timestamp(n.created_at)) for n in notes]
        print(AsciiTable(data).table)
        return 0
    print('\n--- Your Notes ---')
    for note in notes:
        _print_note(note)
    print('------------------\n')
    return 0


def _delete(args, pn: Pocketnotes) -> int:
    removed, saved = pn.delete(args.id)
    if not saved:
        return 1
    if removed:
        print(f"Note with ID '{args.id}' deleted successfully.")
    else:
        print(f"No note found with ID '{args.id}'.")
    return 0


def argparser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='pocketnotes',
        description='Keeps short text notes in a single JSON file in your home directory.')
    parser.set_defaults(func=None)
    parser.add_argument('-v', '--verbose', action='store_true', help='Print diagnostic messages.')

    subs = parser.add_subparsers(title='Commands')

    p_create = subs.add_parser('create', help='Create a new note. Prints the ID assigned to it.')
    p_create.add_argument('title', nargs='?', help='Title of the note. Required.')
    p_create.add_argument('-d', '--desc', help='Description of the note. Defaults to empty.')
    p_create.set_defaults(func=_create, required='title',
                          usage_error=f"Error: 'create' command requires a title. Usage: {CREATE_USAGE}")

    p_list = subs.add_parser('list', help='List all notes, most recently created first.')
    p_list_formats = p_list.add_mutually_exclusive_group()
    p_list_formats.add_argument('-j', '--json', action='store_true',
                                help='Output as JSON. The output is an array of note objects, in the same order '
                                     'as the default output.')
    p_list_formats.add_argument('-t', '--table', action='store_true', help='Format output as a table.')
    p_list.set_defaults(func=_list, required=None)

    p_delete = subs.add_parser('delete', help='Delete a note by its ID.')
    p_delete.add_argument('id', nargs='?', help='ID of the note, as shown by the list command.')
    p_delete.set_defaults(func=_delete, required='id',
                          usage_error=f"Error: 'delete' command requires a note ID. Usage: {DELETE_USAGE}")

    return parser


def main(args=None) -> int:
    """Runs the tool and returns its exit code.

    args may be an array of string command-line arguments; if absent,
    the process's arguments are used.
    """
    parser = argparser()
    argv = sys.argv[1:] if args is None else list(args)
    positional = [a for a in argv if not a.startswith('-')]
    if not positional or positional[0] not in COMMANDS:
        parser.print_help()
        return 0
    args, extras = parser.parse_known_args(argv)
    _configure_logging(args.verbose)
    if args.required and getattr(args, args.required) is None and extras:
        # a title or id starting with a dash is not recognized as a positional
        setattr(args, args.required, extras.pop(0))
    if extras:
        logger.debug('Ignoring extra arguments: %s', ' '.join(extras))
    if args.required and not getattr(args, args.required):
        print(args.usage_error, file=sys.stderr)
        return 1
    try:
        pn = Pocketnotes.for_user()
    except StoreDirectoryError as e:
        print(f'Error creating notes directory: {e.message}', file=sys.stderr)
        return 1
    return args.func(args, pn)
