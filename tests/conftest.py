import pytest
from typer.testing import CliRunner
from typing import Callable, Dict, List, Tuple, Union

import httpx

from delicli.core.services.bookmark_service import DeliciousClient
from delicli.domain.models.settings import ClientSettings
from delicli.infrastructure.config import settings as config_settings

API_BASE = "https://api.del.icio.us/v1/"
FEEDS_BASE = "http://feeds.delicious.com/v2/json/"

# A canned reply is either a body (served with HTTP 200) or a (status, body) pair.
Reply = Union[str, Tuple[int, str]]


class StubDelicious:
    """httpx.MockTransport handler serving canned replies per URL path.

    Paths are matched against the request path with the API base stripped,
    e.g. 'posts/update' or 'tags/bundles/all'. Feed requests are matched on
    'feed'. A list of replies is served in order, the last one repeating.
    """

    def __init__(self) -> None:
        self.replies: Dict[str, List[Reply]] = {}
        self.requests: List[httpx.Request] = []

    def reply(self, path: str, *replies: Reply) -> "StubDelicious":
        self.replies[path] = list(replies)
        return self

    def _key(self, request: httpx.Request) -> str:
        if request.url.host == "feeds.delicious.com":
            return "feed"
        return request.url.path[len("/v1/"):]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        queue = self.replies.get(self._key(request))
        if not queue:
            return httpx.Response(404, text="no stub")
        reply = queue.pop(0) if len(queue) > 1 else queue[0]
        status, body = reply if isinstance(reply, tuple) else (200, reply)
        return httpx.Response(status, text=body)


@pytest.fixture
def client_settings() -> ClientSettings:
    """Settings for user 'alice' with throttling disabled so tests never sleep."""
    return ClientSettings(user="alice", password="abcdef", min_interval=0.0)


@pytest.fixture
def stub() -> StubDelicious:
    return StubDelicious()


@pytest.fixture
def http_client(stub: StubDelicious):
    client = httpx.Client(transport=httpx.MockTransport(stub))
    yield client
    client.close()


@pytest.fixture
def make_client(client_settings: ClientSettings, http_client: httpx.Client) -> Callable[..., DeliciousClient]:
    """Factory for a DeliciousClient talking to the stub transport."""
    def _make(settings: ClientSettings = None) -> DeliciousClient:
        return DeliciousClient(settings or client_settings, http_client=http_client)
    return _make


@pytest.fixture(scope="session")
def runner():
    """Provides a Typer CliRunner instance."""
    return CliRunner()


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Keeps tests away from the developer's ~/.delicli/config.yaml, .env and environment."""
    monkeypatch.setattr(config_settings, "_loaded", True)
    monkeypatch.setattr(config_settings, "_config", {})
    for name in ("DELICIOUS_USER", "DELICIOUS_PASSWORD", "DELICIOUS_PROTOCOL",
                 "DELICIOUS_BASE_HOST", "DELICIOUS_FEEDS_URL", "DELICIOUS_TIMEOUT",
                 "DELICIOUS_USER_AGENT", "LOGGING_LEVEL", "LOGGING_FILE", "LOGGING_FORMAT"):
        monkeypatch.delenv(name, raising=False)
    yield
    config_settings.clear_test_config()
