"""
Search pipeline orchestration.

This module coordinates the full request workflow:
Query → Parsing → Cache lookup → Query building → SPARQL → Mapping → Cache

It provides the entry points used by the HTTP handlers for searching
papers and fetching a single paper's details.
"""

import logging
from typing import Callable, List, Optional

import httpx

from rdf_search.core.cache import ResponseCache
from rdf_search.core.config import Config, settings
from rdf_search.core.errors import MissingParameterError, PaperNotFoundError, QueryTooLongError
from rdf_search.core.schemas import PaperDetails, ParsedQuery, SearchResponse
from rdf_search.retrieval.mapper import row_to_paper_details, row_value, rows_to_search_items
from rdf_search.retrieval.query_builder import (
    MODE_CONTAINS,
    MODE_STARTS,
    SparqlQueryBuilder,
    paper_iri_from_id,
)
from rdf_search.retrieval.query_parser import QueryParser, collapse_whitespace, get_query_parser
from rdf_search.sparql.client import SparqlClient, SparqlRow

logger = logging.getLogger(__name__)

# Search modes: "query" is the combined title/author/year/id syntax of the
# ``q`` parameter, "title" the legacy title-only search of ``title``.
SEARCH_MODE_QUERY = "query"
SEARCH_MODE_TITLE = "title"


def normalize_query(text: str) -> str:
    return collapse_whitespace(text).lower()


def make_cache_key(mode: str, text: str, parsed: ParsedQuery) -> str:
    return (
        f"{mode}|{normalize_query(text)}"
        f"|t={parsed.title_q.lower()}|a={parsed.author_q.lower()}"
        f"|y={parsed.year_q}|id={parsed.direct_id or ''}"
    )


class SearchPipeline:
    """
    Runs searches and detail lookups against the paper graph.

    Args:
        client: SPARQL client used for every upstream call
        cache: Response cache for search payloads
        config: Settings with length bounds and limits
        parser: Free-text query parser
        builder: SPARQL query builder
    """

    def __init__(
        self,
        client: SparqlClient,
        cache: ResponseCache,
        config: Optional[Config] = None,
        parser: Optional[QueryParser] = None,
        builder: Optional[SparqlQueryBuilder] = None,
    ):
        self.config = config or settings
        self.client = client
        self.cache = cache
        self.parser = parser or get_query_parser()
        self.builder = builder or SparqlQueryBuilder(limit=self.config.SEARCH_RESULT_LIMIT)

    def _max_length(self, mode: str) -> int:
        if mode == SEARCH_MODE_TITLE:
            return self.config.TITLE_SEARCH_MAX_LENGTH
        return self.config.SEARCH_MAX_LENGTH

    async def _select_with_fallback(self, build: Callable[[str], str]) -> List[SparqlRow]:
        rows = await self.client.select(build(MODE_STARTS))
        if not rows:
            logger.info("Prefix match returned no rows, retrying with infix match")
            rows = await self.client.select(build(MODE_CONTAINS))
        return rows

    async def _fetch_rows(self, parsed: ParsedQuery, mode: str) -> List[SparqlRow]:
        if parsed.is_direct:
            return await self.client.select(self.builder.build_direct(parsed.direct_id))

        if mode == SEARCH_MODE_TITLE:
            return await self._select_with_fallback(
                lambda m: self.builder.build_title(parsed.title_q, m)
            )

        if parsed.title_q:
            return await self._select_with_fallback(
                lambda m: self.builder.build_composite(parsed, m)
            )
        return await self.client.select(self.builder.build_composite(parsed))

    async def search(self, raw_query: str, mode: str = SEARCH_MODE_QUERY) -> SearchResponse:
        """
        Search papers by free-text query.

        Args:
            raw_query: Text from the ``q`` or ``title`` parameter
            mode: SEARCH_MODE_QUERY or SEARCH_MODE_TITLE

        Returns:
            SearchResponse, empty for queries below the minimum length

        Raises:
            QueryTooLongError: Query exceeds the bound for its mode
        """
        text = (raw_query or "").strip()

        if len(text) < self.config.SEARCH_MIN_LENGTH:
            return SearchResponse(items=[])
        if len(text) > self._max_length(mode):
            raise QueryTooLongError()

        if mode == SEARCH_MODE_TITLE:
            parsed = ParsedQuery(title_q=collapse_whitespace(text))
        else:
            parsed = self.parser.parse(text)

        if parsed.is_empty():
            return SearchResponse(items=[])

        key = make_cache_key(mode, text, parsed)
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug(f"Cache hit for {key!r}")
            return cached

        rows = await self._fetch_rows(parsed, mode)
        response = SearchResponse(items=rows_to_search_items(rows))
        logger.info(f"Search {text!r} returned {len(response.items)} items")

        self.cache.set(key, response)
        return response

    async def get_paper(self, paper_id: Optional[str]) -> PaperDetails:
        """
        Fetch the details of one paper.

        Raises:
            MissingParameterError: No id given
            PaperNotFoundError: The graph has no such paper
        """
        paper_id = (paper_id or "").strip()
        if not paper_id:
            raise MissingParameterError("Missing id")

        paper_iri = paper_iri_from_id(paper_id)
        rows = await self.client.select(self.builder.build_detail(paper_id))
        if not rows or not row_value(rows[0], "paper"):
            raise PaperNotFoundError()

        return row_to_paper_details(rows[0], paper_id, paper_iri)


def create_pipeline(
    config: Optional[Config] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    clock: Optional[Callable[[], float]] = None,
) -> SearchPipeline:
    """Build a SearchPipeline with its own client and cache."""
    config = config or settings
    cache = ResponseCache(
        ttl_seconds=config.SEARCH_CACHE_TTL_SECONDS,
        max_entries=config.SEARCH_CACHE_MAX_ENTRIES,
        clock=clock,
    )
    client = SparqlClient(config=config, transport=transport)
    return SearchPipeline(client=client, cache=cache, config=config)
