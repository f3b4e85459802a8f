import logging

import pytest


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Keep user settings out of the tests."""
    home = tmp_path / "settings-home"
    monkeypatch.setenv("CODE_SNIPPETS_HOME", str(home))
    return home


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers the CLI attaches to streams the runner closes."""
    yield
    logger = logging.getLogger("code_snippets")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
