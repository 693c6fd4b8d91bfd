import logging
from pathlib import Path
import pytest


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    logger = logging.getLogger('pocketnotes')
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def home(fs):
    path = Path('~').expanduser()
    path.mkdir(parents=True, exist_ok=True)
    return path
