import pytest

from html_md_server.core.config import Settings
from tests.helpers.fakes import FakeConverter, FakeFetcher, html_response, markdown_output


@pytest.fixture
def settings():
    return Settings(_env_file=None)


@pytest.fixture
def fetcher():
    return FakeFetcher(response=html_response("<h1>Test</h1><p>Content</p>"))


@pytest.fixture
def converter():
    return FakeConverter(result=[markdown_output("# Test\n\nContent")])
