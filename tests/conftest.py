from dataclasses import dataclass, field
from typing import Any, Callable

import httpx
import pytest

from thecity.client import CityClient
from thecity.config import Config

Responder = Callable[[httpx.Request], httpx.Response]


@dataclass
class MockAPI:
    responses: dict[str, Responder] = field(default_factory=dict)
    calls: list[httpx.Request] = field(default_factory=list)

    def add_json(
        self,
        path: str,
        payload: Any,
        status_code: int = 200,
        headers: dict[str, str] | None = None,
    ) -> None:
        def responder(_: httpx.Request) -> httpx.Response:
            return httpx.Response(status_code=status_code, json=payload, headers=headers)

        self.responses[path] = responder

    def add_responder(self, path: str, responder: Responder) -> None:
        self.responses[path] = responder

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        responder = self.responses.get(request.url.path)
        if responder is None:
            raise AssertionError(f'Unexpected request to {request.url.path}')
        return responder(request)


@pytest.fixture
def config() -> Config:
    return Config(
        base_url='https://example.test',
        access_token='pytest-token',
        user_agent='pytest-agent',
        timeout=5.0,
        max_retries=3,
        retry_base_delay=0.1,  # Fast for tests
        retry_max_delay=1.0,  # Fast for tests
    )


@pytest.fixture
def mock_api() -> tuple[MockAPI, httpx.MockTransport]:
    api = MockAPI()
    transport = httpx.MockTransport(api.handler)
    return api, transport


@pytest.fixture
def city_client(config: Config, mock_api: tuple[MockAPI, httpx.MockTransport]) -> CityClient:
    _, transport = mock_api
    return CityClient(config, transport=transport)
