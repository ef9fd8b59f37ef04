"""Shared fixtures for core unit tests"""

import io

import pytest

from gitbook2wiki.config import Settings
from gitbook2wiki.core.parse import convert_document


WIKI_REPO = "/kataras/iris/wiki"


@pytest.fixture(name="settings")
def settings_fixture():
    return Settings(wiki_repo=WIKI_REPO)


@pytest.fixture(name="convert")
def convert_fixture(settings):
    """Run convert_document over text and return the converted text."""
    def _convert(text: str, filename: str = "page.md", settings: Settings = settings) -> str:
        dest = io.BytesIO()
        convert_document(filename, io.BytesIO(text.encode("utf-8")), dest, settings)
        return dest.getvalue().decode("utf-8")
    return _convert
