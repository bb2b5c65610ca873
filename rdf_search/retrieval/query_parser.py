"""
Free-text query interpretation.

This module turns a raw search string into structured search intent:
a title phrase, an author phrase, a year, or a direct paper identifier.

Rules are applied in order and the first match wins:
1. Direct identifier (``.../publication/ris/<id>``, ``id:<id>``, ``ris:<id>``,
   or an all-digit string whose length is not 4)
2. Year-only query (exactly four digits)
3. ``author:`` / ``a:`` segment, up to the next ``year:`` / ``y:`` token
4. ``year:`` / ``y:`` segment, else the first bare four-digit token
5. Whatever remains is the title phrase

Parsing is regex-based and therefore ambiguous: a title that itself
contains ``year:`` or `` a:`` is split as if those were field markers.
"""

import logging
import re
from typing import Optional, Tuple

from rdf_search.core.schemas import ParsedQuery

logger = logging.getLogger(__name__)

DIRECT_IRI_PATTERN = re.compile(r"(?:^|/)publication/ris/([^/#?\s]+)/?$", re.IGNORECASE)
PREFIXED_ID_PATTERN = re.compile(r"^(?:id|ris):\s*(\S+)$", re.IGNORECASE)
NUMERIC_PATTERN = re.compile(r"^\d+$")
YEAR_ONLY_PATTERN = re.compile(r"^\d{4}$")

AUTHOR_SEGMENT_PATTERN = re.compile(
    r"(?:^|\s)(?:author|a):\s*(.*?)\s*(?=\s(?:year|y):|$)",
    re.IGNORECASE,
)
YEAR_SEGMENT_PATTERN = re.compile(r"(?:^|\s)(?:year|y):\s*(\d{4})\b", re.IGNORECASE)
BARE_YEAR_PATTERN = re.compile(r"\b(\d{4})\b")

_WHITESPACE = re.compile(r"\s+")


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


def _cut(text: str, match: "re.Match[str]") -> str:
    return text[: match.start()] + " " + text[match.end():]


class QueryParser:
    """
    Parses free-text search strings into ParsedQuery objects.

    The parser is stateless; a single shared instance is used by the
    search service.
    """

    def match_direct_id(self, text: str) -> Optional[str]:
        """
        Detect a direct paper identifier.

        Args:
            text: Trimmed query text

        Returns:
            The identifier, or None if the text is not an identifier
        """
        m = DIRECT_IRI_PATTERN.search(text) or PREFIXED_ID_PATTERN.match(text)
        if m:
            return m.group(1)
        if NUMERIC_PATTERN.match(text) and len(text) != 4:
            return text
        return None

    def _extract_author(self, text: str) -> Tuple[str, str]:
        m = AUTHOR_SEGMENT_PATTERN.search(text)
        if not m:
            return "", text
        return collapse_whitespace(m.group(1)), _cut(text, m)

    def _extract_year(self, text: str) -> Tuple[str, str]:
        m = YEAR_SEGMENT_PATTERN.search(text) or BARE_YEAR_PATTERN.search(text)
        if not m:
            return "", text
        return m.group(1), _cut(text, m)

    def parse(self, query: str) -> ParsedQuery:
        """
        Parse a raw query string into structured search intent.

        Args:
            query: User's raw search text

        Returns:
            ParsedQuery with either direct_id or title/author/year populated
        """
        text = collapse_whitespace(query or "")
        if not text:
            return ParsedQuery()

        direct_id = self.match_direct_id(text)
        if direct_id is not None:
            logger.debug(f"Direct identifier query: {direct_id}")
            return ParsedQuery(direct_id=direct_id)

        if YEAR_ONLY_PATTERN.match(text):
            return ParsedQuery(year_q=text)

        author_q, rest = self._extract_author(text)
        year_q, rest = self._extract_year(rest)
        title_q = collapse_whitespace(rest)

        parsed = ParsedQuery(title_q=title_q, author_q=author_q, year_q=year_q)
        logger.debug(f"Parsed query {query!r}: {parsed}")
        return parsed


# Module-level singleton
_query_parser: Optional[QueryParser] = None


def get_query_parser() -> QueryParser:
    """Get or create the singleton QueryParser instance."""
    global _query_parser
    if _query_parser is None:
        _query_parser = QueryParser()
    return _query_parser
