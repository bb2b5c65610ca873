"""
SPARQL module wrapping the external graph query endpoint.

Key operations:
- Sending SELECT queries over HTTP
- Returning flattened result bindings
"""

from rdf_search.sparql.client import SparqlClient, SparqlRow

__all__ = ["SparqlClient", "SparqlRow"]
