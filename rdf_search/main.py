"""
Application entry point.

This module serves as the main entry point for running the
RDF paper search API server using uvicorn.
"""

import os

from uvicorn import run


def main():
    run(
        "rdf_search.api.app:app",
        host=os.getenv("HOST", "localhost"),
        port=int(os.getenv("PORT", "8000")),
        reload=os.getenv("RELOAD", "false").lower() == "true",
    )


if __name__ == "__main__":
    main()
