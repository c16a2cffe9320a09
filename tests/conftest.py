import json

import pytest

from wikiclient.wikipedia import Wikipedia


class MockClient:
    """
    Stands in for the HTTP executor: records every request and replays
    canned responses in order. A queued exception is raised instead.
    """

    def __init__(self, *responses):
        self.urls = []
        self.arguments = []
        self.responses = list(responses)

    def push(self, *responses):
        self.responses.extend(responses)

    def get(self, base_url, params):
        self.urls.append(base_url)
        self.arguments.append(list(params))
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        if isinstance(response, str):
            return response
        return json.dumps(response)


class AsyncMockClient:
    """Async facade over a MockClient sharing its queue and records."""

    def __init__(self, *responses):
        self.sync = MockClient(*responses)

    @property
    def arguments(self):
        return self.sync.arguments

    def push(self, *responses):
        self.sync.push(*responses)

    async def get(self, base_url, params):
        return self.sync.get(base_url, params)


@pytest.fixture
def client():
    return MockClient()


@pytest.fixture
def wiki(client):
    return Wikipedia(client=client)


@pytest.fixture
def async_client():
    return AsyncMockClient()
