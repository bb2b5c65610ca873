"""
Result mapping from SPARQL bindings to API models.

Converts aggregated result rows into SearchItem and PaperDetails objects:
- short identifiers are derived from paper and person IRIs
- multi-valued GROUP_CONCAT fields are split back into lists
- stored "Last, First" names are reordered for display
"""

import logging
import re
from typing import List, Optional

from rdf_search.core.schemas import AuthorRef, PaperDetails, SearchItem
from rdf_search.sparql.client import SparqlRow

logger = logging.getLogger(__name__)

PAPER_ID_PATTERN = re.compile(r"/ris/([^/#]+)\s*$")
PERSON_ID_PATTERNS = (
    re.compile(r"/hash/([^/#]+)\s*$"),
    re.compile(r"/uni/([^/#]+)\s*$"),
)


def to_display_name(name: str) -> str:
    """
    Reorder a stored "Last, First Middle" name to "First Middle Last".

    Names without a comma are returned trimmed.
    """
    parts = [p.strip() for p in name.split(",") if p.strip()]
    if len(parts) >= 2:
        last = parts[0]
        first = " ".join(parts[1:])
        return f"{first} {last}".strip()
    return name.strip()


def to_paper_id(paper_iri: str) -> str:
    m = PAPER_ID_PATTERN.search(paper_iri)
    return m.group(1) if m else paper_iri


def to_person_id(person_iri: str) -> str:
    for pattern in PERSON_ID_PATTERNS:
        m = pattern.search(person_iri)
        if m:
            return m.group(1)
    return person_iri


def split_multi(value: Optional[str], sep: str) -> List[str]:
    """Split a GROUP_CONCAT value, dropping empty pieces."""
    if not value:
        return []
    return [piece.strip() for piece in value.split(sep) if piece.strip()]


def row_value(row: SparqlRow, name: str) -> Optional[str]:
    """Return the plain value of a binding, or None if unbound."""
    binding = row.get(name)
    if not binding:
        return None
    return binding.get("value")


def row_to_search_item(row: SparqlRow) -> Optional[SearchItem]:
    paper_iri = row_value(row, "paper")
    if not paper_iri:
        return None

    author_names = [to_display_name(n) for n in split_multi(row_value(row, "authors"), ";")]
    author_iris = split_multi(row_value(row, "authorIris"), "|")

    return SearchItem(
        id=to_paper_id(paper_iri),
        iri=paper_iri,
        title=row_value(row, "title") or "",
        year=row_value(row, "year") or None,
        authors_text=", ".join(author_names),
        authors=[AuthorRef(id=to_person_id(iri), iri=iri) for iri in author_iris],
    )


def rows_to_search_items(rows: List[SparqlRow]) -> List[SearchItem]:
    """
    Map search result rows to SearchItems.

    Rows without a subject IRI are dropped.
    """
    items = []
    for row in rows:
        item = row_to_search_item(row)
        if item is None:
            logger.debug("Dropping result row without paper IRI")
            continue
        items.append(item)
    return items


def row_to_paper_details(row: SparqlRow, paper_id: str, paper_iri: str) -> PaperDetails:
    """
    Flatten a detail-query row into PaperDetails.

    Args:
        row: The single aggregated row of the detail query
        paper_id: Identifier requested by the client
        paper_iri: IRI built from that identifier

    Returns:
        PaperDetails with absent scalars as None and absent lists as []
    """

    def pipe(name: str) -> List[str]:
        return split_multi(row_value(row, name), "|")

    def semi(name: str) -> List[str]:
        return split_multi(row_value(row, name), ";")

    return PaperDetails(
        id=paper_id,
        iri=paper_iri,
        type=row_value(row, "type"),
        title=row_value(row, "title") or "",
        subtitle=row_value(row, "subtitle"),
        year=row_value(row, "year"),
        abstract=row_value(row, "abstract"),
        keywords=semi("keywords"),
        same_as=pipe("sameAs"),
        urls=pipe("urls"),
        is_part_of=pipe("isPartOf"),
        volume=row_value(row, "volume"),
        issue=row_value(row, "issue"),
        page_start=row_value(row, "pageStart"),
        page_end=row_value(row, "pageEnd"),
        number_of_pages=row_value(row, "numberOfPages"),
        access_rights=row_value(row, "accessRights"),
        licenses=pipe("licenses"),
        publisher_names=pipe("publisherNames"),
        authors=[to_display_name(n) for n in semi("authorNames")],
        editors=[to_display_name(n) for n in semi("editorNames")],
    )
