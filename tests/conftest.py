import os
from typing import Any, Callable, Dict, List, Tuple, Union
from unittest.mock import patch

import pytest

from tcprovider.config.schemas import ProviderConfig, RetryConfig
from tcprovider.infrastructure.protection import RateLimiter


class FakeClock:
    """Monotonic clock whose sleep advances time instead of blocking."""

    def __init__(self, start: float = 1000.0):
        self.now = start
        self.sleeps: List[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


Reply = Union[Dict[str, Any], BaseException, Callable[[Dict[str, Any]], Dict[str, Any]]]


class FakeApi:
    """
    Stand-in for TencentCloudClient.

    Replies are scripted per action. A list is consumed one reply per call
    and its last element repeats; an exception reply is raised; a callable
    reply receives the request parameters.
    """

    def __init__(self):
        self.replies: Dict[str, Union[Reply, List[Reply]]] = {}
        self.calls: List[Tuple[str, str, Dict[str, Any]]] = []

    def reply(self, action: str, *replies: Reply) -> None:
        self.replies[action] = list(replies)

    def call(self, api: Tuple[str, str], action: str, params: Dict[str, Any]) -> Dict[str, Any]:
        self.calls.append((api[0], action, params))
        scripted = self.replies.get(action)
        if scripted is None:
            raise AssertionError(f"unexpected call to {action}")
        reply = scripted.pop(0) if len(scripted) > 1 else scripted[0]
        if isinstance(reply, BaseException):
            raise reply
        if callable(reply):
            reply = reply(params)
        return {"Response": dict(reply, RequestId="req-test")}

    def actions(self) -> List[str]:
        return [action for _, action, _ in self.calls]

    def params(self, action: str) -> Dict[str, Any]:
        """Parameters of the last call to action."""
        for _, called, params in reversed(self.calls):
            if called == action:
                return params
        raise AssertionError(f"{action} was never called")


@pytest.fixture(autouse=True)
def tencentcloud_credentials():
    """Credentials for configuration tests; never used against a real endpoint."""
    with patch.dict(os.environ, {
        "TENCENTCLOUD_SECRET_ID": "AKIDtesting",
        "TENCENTCLOUD_SECRET_KEY": "testing",
    }):
        yield


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def fake_api():
    return FakeApi()


@pytest.fixture
def retry_config():
    return RetryConfig(write_timeout=300, read_timeout=180, min_interval=0.5, max_interval=10)


@pytest.fixture
def provider_config(retry_config):
    return ProviderConfig(secret_id="AKIDtesting", secret_key="testing", retry=retry_config)


@pytest.fixture
def rate_limiter(clock):
    return RateLimiter(requests_per_second=1000, clock=clock, sleep=clock.sleep)


@pytest.fixture
def handler_factory(fake_api, rate_limiter, retry_config, clock):
    """Build any handler class wired to the fake API and fake clock."""
    def build(handler_class):
        return handler_class(fake_api, rate_limiter, retry_config, sleep=clock.sleep, clock=clock)
    return build
