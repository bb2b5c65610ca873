"""
Error taxonomy for the search service.

Every error the request handlers answer deliberately derives from
``RdfSearchError`` and carries the HTTP status it maps to. Anything else
reaching a handler is reported as a 500.
"""


class RdfSearchError(Exception):
    """Base class for errors with a known HTTP status."""

    status_code: int = 500


class QueryTooLongError(RdfSearchError):
    status_code = 400

    def __init__(self, message: str = "Query too long"):
        super().__init__(message)


class MissingParameterError(RdfSearchError):
    status_code = 400


class PaperNotFoundError(RdfSearchError):
    status_code = 404

    def __init__(self, message: str = "Not found"):
        super().__init__(message)


class SparqlEndpointError(RdfSearchError):
    """The graph endpoint answered with a non-2xx status or was unreachable."""

    status_code = 500


class ConfigurationError(RdfSearchError):
    """A required setting (e.g. SPARQL_ENDPOINT) is missing."""

    status_code = 500
