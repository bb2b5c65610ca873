import pytest

from rdf_search.core.schemas import ParsedQuery
from rdf_search.retrieval.query_builder import (
    MODE_CONTAINS,
    MODE_STARTS,
    PAPER_IRI_BASE,
    SparqlQueryBuilder,
    escape_sparql_string_literal,
    paper_iri_from_id,
)

NAMESPACE_FILTER = f'FILTER(STRSTARTS(STR(?paper), "{PAPER_IRI_BASE}"))'


@pytest.fixture
def builder() -> SparqlQueryBuilder:
    return SparqlQueryBuilder()


def test_escape_special_characters() -> None:
    raw = 'a\\b"c\nd\re\tf'
    assert escape_sparql_string_literal(raw) == 'a\\\\b\\"c\\nd\\re\\tf'


def test_escape_leaves_plain_text_alone() -> None:
    assert escape_sparql_string_literal("Graph Neural Networks") == "Graph Neural Networks"


def test_paper_iri_is_percent_encoded() -> None:
    assert paper_iri_from_id("42") == PAPER_IRI_BASE + "42"
    assert paper_iri_from_id("a b/c>") == PAPER_IRI_BASE + "a%20b%2Fc%3E"


def test_title_query_prefix_mode(builder: SparqlQueryBuilder) -> None:
    query = builder.build_title("Deep", MODE_STARTS)
    assert 'FILTER(STRSTARTS(LCASE(STR(?t)), LCASE("Deep")))' in query
    assert "COALESCE(?title0, ?name0)" in query
    assert NAMESPACE_FILTER in query
    assert "GROUP BY ?paper" in query
    assert "ORDER BY LCASE(STR(SAMPLE(?t)))" in query
    assert "LIMIT 25" in query


def test_title_query_infix_mode(builder: SparqlQueryBuilder) -> None:
    query = builder.build_title("Deep", MODE_CONTAINS)
    assert 'FILTER(CONTAINS(LCASE(STR(?t)), LCASE("Deep")))' in query


def test_title_query_escapes_input(builder: SparqlQueryBuilder) -> None:
    query = builder.build_title('say "hi"\n')
    assert 'LCASE("say \\"hi\\"\\n")' in query


def test_unknown_mode_is_rejected(builder: SparqlQueryBuilder) -> None:
    with pytest.raises(ValueError):
        builder.build_title("Deep", "regex")


def test_composite_title_only(builder: SparqlQueryBuilder) -> None:
    query = builder.build_composite(ParsedQuery(title_q="neural nets"))
    assert 'FILTER(STRSTARTS(LCASE(STR(?name0)), LCASE("neural nets")))' in query
    assert "FILTER EXISTS" not in query
    assert "?fDate" not in query
    assert NAMESPACE_FILTER in query
    assert "ORDER BY LCASE(STR(SAMPLE(?name0)))" in query


def test_composite_author_filter_uses_contains(builder: SparqlQueryBuilder) -> None:
    query = builder.build_composite(ParsedQuery(author_q="Smith"), MODE_STARTS)
    assert "FILTER EXISTS" in query
    assert "?paper schema:author ?fa ." in query
    assert 'FILTER(CONTAINS(LCASE(STR(?fName)), LCASE("Smith")))' in query
    assert "LCASE(STR(?name0))" not in query


def test_composite_year_filter(builder: SparqlQueryBuilder) -> None:
    query = builder.build_composite(ParsedQuery(year_q="2020"))
    assert 'FILTER(STR(?fDate) = "2020")' in query


def test_composite_all_components(builder: SparqlQueryBuilder) -> None:
    parsed = ParsedQuery(title_q="neural", author_q="Smith", year_q="2020")
    query = builder.build_composite(parsed, MODE_CONTAINS)
    assert 'FILTER(CONTAINS(LCASE(STR(?name0)), LCASE("neural")))' in query
    assert 'LCASE("Smith")' in query
    assert 'STR(?fDate) = "2020"' in query


def test_composite_requires_a_component(builder: SparqlQueryBuilder) -> None:
    with pytest.raises(ValueError):
        builder.build_composite(ParsedQuery())


def test_direct_query(builder: SparqlQueryBuilder) -> None:
    query = builder.build_direct("42")
    assert f"BIND(<{PAPER_IRI_BASE}42> AS ?paper)" in query
    assert NAMESPACE_FILTER in query
    assert "LIMIT 1" in query


def test_detail_query(builder: SparqlQueryBuilder) -> None:
    query = builder.build_detail("42")
    assert f"BIND(<{PAPER_IRI_BASE}42> AS ?paper)" in query
    assert "FILTER EXISTS { ?paper ?anyP ?anyO . }" in query
    assert "dcterms:license" in query
    assert "schema:editor" in query
    assert 'separator="; ") AS ?authorNames' in query
    assert 'separator="|") AS ?authorIris' in query
    assert "LIMIT 1" in query


def test_custom_limit() -> None:
    query = SparqlQueryBuilder(limit=5).build_title("Deep")
    assert "LIMIT 5" in query


def test_count_query(builder: SparqlQueryBuilder) -> None:
    query = builder.build_count()
    assert "COUNT(DISTINCT ?paper)" in query
    assert NAMESPACE_FILTER in query
