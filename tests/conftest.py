"""테스트 설정"""
from typing import Callable, List

import httpx
import pytest

from remitano import RemitanoClient


TEST_API_KEY = "test_api_key"
TEST_API_SECRET = "test_api_secret"

# 2024-01-01 00:00:00 UTC
FIXED_TIMESTAMP = 1704067200.0


class StubServer:
    """httpx.MockTransport 기반 스텁 서버 (받은 요청 기록)"""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.handler = handler
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture
def stub_server() -> Callable[..., StubServer]:
    """응답 핸들러를 받아 스텁 서버를 생성하는 팩토리"""
    return StubServer


@pytest.fixture
def make_client() -> Callable[..., RemitanoClient]:
    """스텁 서버에 연결된 클라이언트 팩토리"""
    def factory(server: StubServer, **kwargs) -> RemitanoClient:
        kwargs.setdefault("clock", lambda: FIXED_TIMESTAMP)
        return RemitanoClient(
            key=TEST_API_KEY,
            secret=TEST_API_SECRET,
            transport=server.transport,
            **kwargs,
        )
    return factory


@pytest.fixture
def api_key() -> str:
    return TEST_API_KEY


@pytest.fixture
def api_secret() -> str:
    return TEST_API_SECRET


@pytest.fixture
def fixed_timestamp() -> float:
    return FIXED_TIMESTAMP
