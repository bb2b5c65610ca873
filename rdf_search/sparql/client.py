"""
SPARQL endpoint client.

This module provides the interface to the external graph query endpoint.
Queries are sent as form-encoded POST requests asking for the standard
SPARQL JSON results format, and the result bindings are returned as-is.

There is no retry and no caching at this layer: each call is a single,
fresh request. Caching is the search service's responsibility.
"""

import logging
from typing import Dict, List, Optional

import httpx

from rdf_search.core.config import Config, settings
from rdf_search.core.errors import SparqlEndpointError

logger = logging.getLogger(__name__)

SPARQL_RESULTS_JSON = "application/sparql-results+json"
ERROR_BODY_LIMIT = 500

# One binding value: {"type": "uri" | "literal", "value": ..., optional
# "xml:lang" / "datatype"}
SparqlBindingValue = Dict[str, str]
SparqlRow = Dict[str, SparqlBindingValue]


class SparqlClient:
    """
    Executes SELECT queries against a SPARQL endpoint.

    Args:
        config: Settings holding the endpoint URL and timeout
        transport: Optional httpx transport (tests pass an ``httpx.MockTransport``)
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config or settings
        self._transport = transport

    def _client_kwargs(self) -> dict:
        kwargs: dict = {}
        if self.config.SPARQL_TIMEOUT is not None:
            kwargs["timeout"] = self.config.SPARQL_TIMEOUT
        if self._transport is not None:
            kwargs["transport"] = self._transport
        return kwargs

    async def select(self, query: str) -> List[SparqlRow]:
        """
        Run a SELECT query and return its result rows.

        Args:
            query: Complete SPARQL query text

        Returns:
            List of bindings, each mapping variable name to a typed value

        Raises:
            ConfigurationError: SPARQL_ENDPOINT is not set
            SparqlEndpointError: Non-2xx response or transport failure
        """
        endpoint = self.config.require_sparql_endpoint()

        try:
            async with httpx.AsyncClient(**self._client_kwargs()) as client:
                response = await client.post(
                    endpoint,
                    data={"query": query},
                    headers={
                        "Content-Type": "application/x-www-form-urlencoded; charset=UTF-8",
                        "Accept": SPARQL_RESULTS_JSON,
                    },
                )
        except httpx.HTTPError as e:
            raise SparqlEndpointError(f"SPARQL request failed: {e}") from e

        if not response.is_success:
            body = response.text[:ERROR_BODY_LIMIT]
            logger.error(f"SPARQL endpoint returned {response.status_code}")
            raise SparqlEndpointError(f"SPARQL error {response.status_code}: {body}")

        try:
            payload = response.json()
        except ValueError as e:
            raise SparqlEndpointError(f"SPARQL response is not JSON: {e}") from e

        rows = ((payload or {}).get("results") or {}).get("bindings") or []
        logger.debug(f"SPARQL query returned {len(rows)} rows")
        return rows
