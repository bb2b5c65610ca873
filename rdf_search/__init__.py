"""Search UI and JSON API over a SPARQL-backed scholarly paper graph."""

__version__ = "0.1.0"
