import pytest
import requests

from wikiclient.errors import TransportError
from wikiclient.http import HttpClient


class FakeResponse:
    def __init__(self, text="{}", status_code=200):
        self.text = text
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response or FakeResponse()
        self.error = error
        self.calls = []

    def get(self, url, params=None, headers=None, timeout=None):
        self.calls.append({"url": url, "params": params, "headers": headers, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return self.response

    def close(self):
        pass


def test_get_returns_body_and_sends_user_agent():
    session = FakeSession(FakeResponse('{"query": {}}'))
    client = HttpClient(user_agent="tester/1.0", session=session, timeout=3.0)
    body = client.get("https://x/api.php", [("action", "query")])
    assert body == '{"query": {}}'

    call = session.calls[0]
    assert call["url"] == "https://x/api.php"
    assert call["params"] == [("action", "query")]
    assert call["timeout"] == 3.0
    assert call["headers"]["User-Agent"] == "tester/1.0"
    assert "Authorization" not in call["headers"]


def test_bearer_token_header():
    session = FakeSession()
    HttpClient(token="s3cret", session=session).get("https://x/api.php", [])
    assert session.calls[0]["headers"]["Authorization"] == "Bearer s3cret"


def test_bad_status_becomes_transport_error():
    client = HttpClient(session=FakeSession(FakeResponse("nope", status_code=503)))
    with pytest.raises(TransportError) as info:
        client.get("https://x/api.php", [])
    assert info.value.status_code == 503


def test_connection_failure_becomes_transport_error():
    client = HttpClient(session=FakeSession(error=requests.ConnectionError("refused")))
    with pytest.raises(TransportError) as info:
        client.get("https://x/api.php", [])
    assert info.value.status_code is None
    assert isinstance(info.value.__cause__, requests.ConnectionError)
