import asyncio
from urllib.parse import parse_qs

import httpx
import pytest

from rdf_search.core.config import Config
from rdf_search.core.errors import ConfigurationError, SparqlEndpointError
from rdf_search.sparql.client import SparqlClient

from conftest import FakeEndpoint, lit, uri


def test_select_posts_form_encoded_query(config: Config) -> None:
    rows = [{"paper": uri("https://example.org/p/1"), "title": lit("T", **{"xml:lang": "en"})}]
    endpoint = FakeEndpoint(lambda query: rows)
    client = SparqlClient(config=config, transport=endpoint.transport)

    result = asyncio.run(client.select("SELECT * WHERE { ?s ?p ?o }"))

    assert result == rows
    request = endpoint.requests[0]
    assert request.method == "POST"
    assert str(request.url) == "http://sparql.test/query"
    assert request.headers["accept"] == "application/sparql-results+json"
    assert request.headers["content-type"].startswith("application/x-www-form-urlencoded")
    assert parse_qs(request.content.decode()) == {"query": ["SELECT * WHERE { ?s ?p ?o }"]}


def test_select_without_bindings_returns_empty_list(config: Config) -> None:
    endpoint = FakeEndpoint(lambda query: httpx.Response(200, json={"head": {}}))
    client = SparqlClient(config=config, transport=endpoint.transport)

    assert asyncio.run(client.select("ASK {}")) == []


def test_non_success_status_raises_with_truncated_body(config: Config) -> None:
    body = "x" * 600
    endpoint = FakeEndpoint(lambda query: httpx.Response(502, text=body))
    client = SparqlClient(config=config, transport=endpoint.transport)

    with pytest.raises(SparqlEndpointError) as exc_info:
        asyncio.run(client.select("SELECT ..."))

    message = str(exc_info.value)
    assert message == f"SPARQL error 502: {'x' * 500}"
    assert len(endpoint.queries) == 1


def test_transport_error_is_wrapped(config: Config) -> None:
    def fail(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = SparqlClient(config=config, transport=httpx.MockTransport(fail))

    with pytest.raises(SparqlEndpointError, match="connection refused"):
        asyncio.run(client.select("SELECT ..."))


def test_missing_endpoint_fails_on_first_call() -> None:
    endpoint = FakeEndpoint()
    client = SparqlClient(config=Config(SPARQL_ENDPOINT=None), transport=endpoint.transport)

    with pytest.raises(ConfigurationError, match="SPARQL_ENDPOINT"):
        asyncio.run(client.select("SELECT ..."))
    assert endpoint.queries == []
