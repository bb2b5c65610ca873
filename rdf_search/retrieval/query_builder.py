"""
SPARQL query construction from structured search intent.

This module renders ParsedQuery objects (or a raw title) into SELECT
queries against the schema.org / Dublin Core vocabulary of the paper
graph. Every query is scoped to the paper identifier namespace and
aggregates rows per paper subject:
- multi-valued fields use GROUP_CONCAT(DISTINCT ...), "; " for names and
  "|" for IRIs
- single-valued fields use SAMPLE

All text interpolated into a query goes through
``escape_sparql_string_literal`` first.
"""

from typing import List
from urllib.parse import quote

from rdf_search.core.schemas import ParsedQuery

PAPER_IRI_BASE = "https://dice-research.org/id/publication/ris/"

NAME_SEPARATOR = "; "
IRI_SEPARATOR = "|"

SEARCH_LIMIT = 25
DETAIL_LIMIT = 1

MODE_STARTS = "starts"
MODE_CONTAINS = "contains"

PREFIXES = """PREFIX schema: <https://schema.org/>
PREFIX rdf: <http://www.w3.org/1999/02/22-rdf-syntax-ns#>
PREFIX dcterms: <http://purl.org/dc/terms/>
"""


def escape_sparql_string_literal(value: str) -> str:
    """Escape a value for use inside a double-quoted SPARQL literal."""
    return (
        value.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
    )


def paper_iri_from_id(paper_id: str) -> str:
    return PAPER_IRI_BASE + quote(paper_id, safe="")


def _namespace_filter(var: str = "?paper") -> str:
    return f'FILTER(STRSTARTS(STR({var}), "{PAPER_IRI_BASE}"))'


def _match_filter(var: str, text: str, mode: str) -> str:
    if mode not in (MODE_STARTS, MODE_CONTAINS):
        raise ValueError(f"Unknown match mode: {mode}")
    fn = "STRSTARTS" if mode == MODE_STARTS else "CONTAINS"
    literal = escape_sparql_string_literal(text)
    return f'FILTER({fn}(LCASE(STR({var})), LCASE("{literal}")))'


class SparqlQueryBuilder:
    """
    Builds SELECT queries for paper search and detail lookups.

    Supported shapes:
    - direct: one paper bound by identifier IRI
    - title: legacy title-only search on title/name
    - composite: any combination of title, author and year filters
    - detail: every field shown on the paper page
    """

    def __init__(self, limit: int = SEARCH_LIMIT):
        self.limit = limit

    def _search_select(self, title_var: str) -> str:
        return f"""SELECT
  ?paper
  (SAMPLE({title_var}) AS ?title)
  (SAMPLE(?year0) AS ?year)
  (GROUP_CONCAT(DISTINCT STR(?aName); separator="{NAME_SEPARATOR}") AS ?authors)
  (GROUP_CONCAT(DISTINCT STR(?a); separator="{IRI_SEPARATOR}") AS ?authorIris)"""

    @staticmethod
    def _authors_block() -> str:
        return """OPTIONAL {
    ?paper schema:author ?a .
    OPTIONAL { ?a schema:name ?aName . }
  }"""

    def build_direct(self, paper_id: str) -> str:
        """
        Build a lookup of a single paper by identifier.

        Args:
            paper_id: Short paper identifier (the segment after /ris/)

        Returns:
            SPARQL query returning at most one row
        """
        paper_iri = paper_iri_from_id(paper_id)
        return f"""{PREFIXES}
{self._search_select("?name0")}
WHERE {{
  BIND(<{paper_iri}> AS ?paper)
  ?paper schema:name ?name0 .
  {_namespace_filter()}
  OPTIONAL {{ ?paper schema:datePublished ?year0 . }}
  {self._authors_block()}
}}
GROUP BY ?paper
LIMIT {DETAIL_LIMIT}
"""

    def build_title(self, title: str, mode: str = MODE_STARTS) -> str:
        """
        Build the legacy title-only search.

        Args:
            title: Title phrase (unescaped)
            mode: "starts" for prefix match, "contains" for infix match

        Returns:
            SPARQL query string
        """
        title_filter = _match_filter("?t", title, mode)
        return f"""{PREFIXES}
{self._search_select("?t")}
WHERE {{
  ?paper a ?type .
  FILTER(?type IN (schema:ScholarlyArticle, schema:CreativeWork))
  OPTIONAL {{ ?paper schema:title ?title0 . }}
  OPTIONAL {{ ?paper schema:name ?name0 . }}
  BIND(COALESCE(?title0, ?name0) AS ?t)
  FILTER(BOUND(?t))
  {_namespace_filter()}
  OPTIONAL {{ ?paper schema:datePublished ?year0 . }}
  {self._authors_block()}
  {title_filter}
}}
GROUP BY ?paper
ORDER BY LCASE(STR(SAMPLE(?t)))
LIMIT {self.limit}
"""

    def build_composite(self, parsed: ParsedQuery, mode: str = MODE_STARTS) -> str:
        """
        Build a search combining title, author and year filters.

        Only the filters for non-empty components are emitted.

        Args:
            parsed: Parsed search intent (title_q / author_q / year_q)
            mode: Title match mode, "starts" or "contains"

        Returns:
            SPARQL query string

        Raises:
            ValueError: If title, author and year are all empty
        """
        if not (parsed.title_q or parsed.author_q or parsed.year_q):
            raise ValueError("Composite search needs a title, author or year")

        filters: List[str] = []
        if parsed.title_q:
            filters.append(_match_filter("?name0", parsed.title_q, mode))
        if parsed.author_q:
            author_match = _match_filter("?fName", parsed.author_q, MODE_CONTAINS)
            filters.append(
                f"""FILTER EXISTS {{
    ?paper schema:author ?fa .
    ?fa schema:name ?fName .
    {author_match}
  }}"""
            )
        if parsed.year_q:
            year = escape_sparql_string_literal(parsed.year_q)
            filters.append(
                f"""?paper schema:datePublished ?fDate .
  FILTER(STR(?fDate) = "{year}")"""
            )

        filter_block = "\n  ".join(filters)
        return f"""{PREFIXES}
{self._search_select("?name0")}
WHERE {{
  ?paper schema:name ?name0 .
  {_namespace_filter()}
  {filter_block}
  OPTIONAL {{ ?paper schema:datePublished ?year0 . }}
  {self._authors_block()}
}}
GROUP BY ?paper
ORDER BY LCASE(STR(SAMPLE(?name0)))
LIMIT {self.limit}
"""

    def build_count(self) -> str:
        """Count named papers in the identifier namespace."""
        return f"""{PREFIXES}
SELECT (COUNT(DISTINCT ?paper) AS ?count)
WHERE {{
  ?paper schema:name ?name0 .
  {_namespace_filter()}
}}
"""

    def build_detail(self, paper_id: str) -> str:
        """
        Build the full metadata lookup for the paper page.

        The subject must have at least one triple, so an unknown id
        yields no rows.
        """
        paper_iri = paper_iri_from_id(paper_id)
        return f"""{PREFIXES}
SELECT
  ?paper
  (SAMPLE(?type0) AS ?type)
  (SAMPLE(?nPages) AS ?numberOfPages)
  (SAMPLE(?name) AS ?title)
  (SAMPLE(?alt) AS ?subtitle)
  (SAMPLE(?year0) AS ?year)
  (SAMPLE(?abs) AS ?abstract)
  (GROUP_CONCAT(DISTINCT STR(?kw); separator="{NAME_SEPARATOR}") AS ?keywords)
  (GROUP_CONCAT(DISTINCT STR(?sameAs0); separator="{IRI_SEPARATOR}") AS ?sameAs)
  (GROUP_CONCAT(DISTINCT STR(?url0); separator="{IRI_SEPARATOR}") AS ?urls)
  (GROUP_CONCAT(DISTINCT STR(?partOf); separator="{IRI_SEPARATOR}") AS ?isPartOf)
  (SAMPLE(?vol) AS ?volume)
  (SAMPLE(?iss) AS ?issue)
  (SAMPLE(?pStart) AS ?pageStart)
  (SAMPLE(?pEnd) AS ?pageEnd)
  (GROUP_CONCAT(DISTINCT STR(?publisher); separator="{IRI_SEPARATOR}") AS ?publisherIris)
  (GROUP_CONCAT(DISTINCT STR(?publisherName); separator="{IRI_SEPARATOR}") AS ?publisherNames)
  (SAMPLE(?access) AS ?accessRights)
  (GROUP_CONCAT(DISTINCT STR(?license); separator="{IRI_SEPARATOR}") AS ?licenses)
  (GROUP_CONCAT(DISTINCT STR(?a); separator="{IRI_SEPARATOR}") AS ?authorIris)
  (GROUP_CONCAT(DISTINCT STR(?aName); separator="{NAME_SEPARATOR}") AS ?authorNames)
  (GROUP_CONCAT(DISTINCT STR(?e); separator="{IRI_SEPARATOR}") AS ?editorIris)
  (GROUP_CONCAT(DISTINCT STR(?eName); separator="{NAME_SEPARATOR}") AS ?editorNames)
WHERE {{
  BIND(<{paper_iri}> AS ?paper)
  FILTER EXISTS {{ ?paper ?anyP ?anyO . }}
  {_namespace_filter()}

  OPTIONAL {{ ?paper rdf:type ?type0 . }}
  OPTIONAL {{ ?paper schema:name ?name . }}
  OPTIONAL {{ ?paper schema:alternateName ?alt . }}
  OPTIONAL {{ ?paper schema:datePublished ?year0 . }}
  OPTIONAL {{ ?paper schema:abstract ?abs . }}
  OPTIONAL {{ ?paper schema:keywords ?kw . }}

  OPTIONAL {{ ?paper schema:sameAs ?sameAs0 . }}
  OPTIONAL {{ ?paper schema:url ?url0 . }}
  OPTIONAL {{ ?paper schema:isPartOf ?partOf . }}

  OPTIONAL {{ ?paper schema:volumeNumber ?vol . }}
  OPTIONAL {{ ?paper schema:issueNumber ?iss . }}
  OPTIONAL {{ ?paper schema:pageStart ?pStart . }}
  OPTIONAL {{ ?paper schema:pageEnd ?pEnd . }}
  OPTIONAL {{ ?paper schema:numberOfPages ?nPages . }}

  OPTIONAL {{ ?paper dcterms:accessRights ?access . }}
  OPTIONAL {{ ?paper dcterms:license ?license . }}

  OPTIONAL {{
    ?paper schema:publisher ?publisher .
    OPTIONAL {{ ?publisher schema:name ?publisherName . }}
  }}
  OPTIONAL {{
    ?paper schema:author ?a .
    OPTIONAL {{ ?a schema:name ?aName . }}
  }}
  OPTIONAL {{
    ?paper schema:editor ?e .
    OPTIONAL {{ ?e schema:name ?eName . }}
  }}
}}
GROUP BY ?paper
LIMIT {DETAIL_LIMIT}
"""

