import pytest

from hecload.catalog import build_catalog


class ScriptedRandom:
    """Random source that replays a fixed list of random() values."""

    def __init__(self, values):
        self.values = list(values)
        self.calls = 0

    def random(self):
        if self.calls >= len(self.values):
            raise AssertionError(f"ScriptedRandom exhausted after {self.calls} draws")
        value = self.values[self.calls]
        self.calls += 1
        return value


class FakeResponse:
    def __init__(self, status_code, text):
        self.status_code = status_code
        self.text = text


class FakeSession:
    """Stands in for requests.Session; records every post."""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def post(self, url, data=None, headers=None, timeout=None):
        self.calls.append({"url": url, "data": data, "headers": headers, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def basic_catalog():
    return build_catalog("basic")


@pytest.fixture
def staging_catalog():
    return build_catalog("staging")
