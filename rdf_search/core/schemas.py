"""
Pydantic schemas for request/response validation and data models.

This module defines the data structures used throughout the application
for type safety and API documentation. Schemas include:
- Parsed search intent produced by the query parser
- Search result items and the search response envelope
- Paper detail representation
- Error payloads

Response models serialize with camelCase aliases (``authorsText``,
``sameAs``, ``pageStart`` ...) to match the JSON contract consumed by the UI.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serializing field names as camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ParsedQuery(BaseModel):
    """
    Structured search intent extracted from a free-text query.

    Attributes:
        title_q: Title phrase (may be empty)
        author_q: Author phrase (may be empty)
        year_q: Four-digit year string (may be empty)
        direct_id: Paper identifier for direct lookups, otherwise None
    """

    title_q: str = ""
    author_q: str = ""
    year_q: str = ""
    direct_id: Optional[str] = None

    @property
    def is_direct(self) -> bool:
        return self.direct_id is not None

    def is_empty(self) -> bool:
        """Check if nothing searchable was extracted."""
        return not (self.direct_id or self.title_q or self.author_q or self.year_q)


class AuthorRef(CamelModel):
    id: str
    iri: str


class SearchItem(CamelModel):
    """One matched paper in a search response."""

    id: str
    iri: str
    title: str
    year: Optional[str] = None
    authors_text: str = ""
    authors: List[AuthorRef] = Field(default_factory=list)


class SearchResponse(CamelModel):
    items: List[SearchItem] = Field(default_factory=list)


class PaperDetails(CamelModel):
    """Flattened metadata of a single paper."""

    id: str
    iri: str
    type: Optional[str] = None
    title: str = ""
    subtitle: Optional[str] = None
    year: Optional[str] = None
    abstract: Optional[str] = None
    keywords: List[str] = Field(default_factory=list)
    same_as: List[str] = Field(default_factory=list)
    urls: List[str] = Field(default_factory=list)
    is_part_of: List[str] = Field(default_factory=list)
    volume: Optional[str] = None
    issue: Optional[str] = None
    page_start: Optional[str] = None
    page_end: Optional[str] = None
    number_of_pages: Optional[str] = None
    access_rights: Optional[str] = None
    licenses: List[str] = Field(default_factory=list)
    publisher_names: List[str] = Field(default_factory=list)
    authors: List[str] = Field(default_factory=list)
    editors: List[str] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    error: str
