import logging
import os.path
from pathlib import Path
import pytest
from pocketnotes.api import Pocketnotes
from pocketnotes.conf import StoreConf, StoreDirectoryError, resolve_store_directory, resolve_store_file_path


def test_resolve_store_directory_creates_directory(tmp_path, caplog):
    caplog.set_level(logging.INFO, logger='pocketnotes')
    path = resolve_store_directory(str(tmp_path))
    assert path == str(tmp_path / '.my_notes')
    assert os.path.isdir(path)
    assert caplog.messages == [f'Created notes directory: {path}']


def test_resolve_store_directory_twice(tmp_path, caplog):
    caplog.set_level(logging.INFO, logger='pocketnotes')
    first = resolve_store_directory(str(tmp_path))
    caplog.clear()
    second = resolve_store_directory(str(tmp_path))
    assert first == second
    assert os.path.isdir(second)
    assert caplog.messages == []


def test_resolve_store_directory_missing_home(tmp_path):
    with pytest.raises(StoreDirectoryError, match='Cannot create notes directory') as excinfo:
        resolve_store_directory(str(tmp_path / 'nobody'))
    assert isinstance(excinfo.value.cause, FileNotFoundError)
    assert excinfo.value.path == str(tmp_path / 'nobody' / '.my_notes')


def test_resolve_store_directory_permission_denied(tmp_path, mocker):
    mocker.patch('os.mkdir', side_effect=PermissionError(13, 'Permission denied'))
    with pytest.raises(StoreDirectoryError, match='Permission denied'):
        resolve_store_directory(str(tmp_path))


def test_resolve_store_directory_path_is_file(tmp_path):
    (tmp_path / '.my_notes').write_text('not a directory')
    with pytest.raises(StoreDirectoryError, match='is not a directory'):
        resolve_store_directory(str(tmp_path))


def test_resolve_store_file_path(tmp_path):
    assert resolve_store_file_path(str(tmp_path)) == str(tmp_path / '.my_notes' / 'notes.json')


def test_resolve_defaults_to_user_home(home):
    assert resolve_store_file_path() == os.path.join(str(home), '.my_notes', 'notes.json')
    assert Path(home, '.my_notes').is_dir()


def test_store_conf_for_user(home):
    conf = StoreConf.for_user()
    assert conf == StoreConf(os.path.join(str(home), '.my_notes'))
    assert conf.file_path == os.path.join(str(home), '.my_notes', 'notes.json')
    pn = conf.instantiate()
    assert isinstance(pn, Pocketnotes)
    assert pn.store.path == conf.file_path
