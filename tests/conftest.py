from typing import Callable, List, Optional, Union
from urllib.parse import parse_qs

import httpx
import pytest

from rdf_search.core.config import Config

PAPER_BASE = "https://dice-research.org/id/publication/ris/"

Responder = Callable[[str], Union[List[dict], httpx.Response]]


def uri(value: str) -> dict:
    return {"type": "uri", "value": value}


def lit(value: str, **extra: str) -> dict:
    return {"type": "literal", "value": value, **extra}


def sparql_json(rows: List[dict]) -> dict:
    return {"head": {"vars": []}, "results": {"bindings": rows}}


class FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeEndpoint:
    """Stands in for the SPARQL endpoint and records every query it receives."""

    def __init__(self, responder: Optional[Responder] = None) -> None:
        self.responder: Responder = responder or (lambda query: [])
        self.queries: List[str] = []
        self.requests: List[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        query = parse_qs(request.content.decode())["query"][0]
        self.queries.append(query)
        self.requests.append(request)
        result = self.responder(query)
        if isinstance(result, httpx.Response):
            return result
        return httpx.Response(
            200,
            json=sparql_json(result),
            headers={"content-type": "application/sparql-results+json"},
        )

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def config() -> Config:
    return Config(SPARQL_ENDPOINT="http://sparql.test/query")


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def endpoint() -> FakeEndpoint:
    return FakeEndpoint()
