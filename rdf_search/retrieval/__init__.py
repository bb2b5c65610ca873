"""
Retrieval module for searching the paper knowledge graph.

This module handles the query-time workflow:
- Query interpretation (free text vs direct paper identifier)
- SPARQL query construction for search and detail lookups
- Mapping of result bindings into API models
- Orchestration with the response cache

The retrieval pipeline provides a unified interface for:
- Composite search (title / author / year)
- Legacy title-only search
- Direct lookup by paper identifier
"""

from rdf_search.retrieval.pipeline import SearchPipeline, create_pipeline
from rdf_search.retrieval.query_builder import SparqlQueryBuilder
from rdf_search.retrieval.query_parser import QueryParser, get_query_parser

__all__ = [
    "SearchPipeline",
    "create_pipeline",
    "QueryParser",
    "get_query_parser",
    "SparqlQueryBuilder",
]
