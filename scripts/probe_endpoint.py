"""
Check that the configured SPARQL endpoint serves the paper graph.

This script counts the named papers in the paper identifier namespace
and, optionally, runs a search through the same pipeline the API uses.

Run this after pointing SPARQL_ENDPOINT at a new endpoint.

Usage:
    python scripts/probe_endpoint.py
    python scripts/probe_endpoint.py --search "author: Smith year:2020"
"""

import argparse
import asyncio
import logging
import sys
from typing import Optional

from rdf_search.core.config import settings
from rdf_search.core.errors import RdfSearchError
from rdf_search.retrieval.mapper import row_value
from rdf_search.retrieval.pipeline import create_pipeline

logger = logging.getLogger(__name__)


async def probe(search: Optional[str] = None) -> int:
    """
    Count papers and optionally run a sample search.

    Args:
        search: Free-text query to run after the count

    Returns:
        Number of papers found in the namespace
    """
    pipeline = create_pipeline(settings)
    logger.info(f"Probing SPARQL endpoint: {settings.SPARQL_ENDPOINT}")

    rows = await pipeline.client.select(pipeline.builder.build_count())
    count = int(row_value(rows[0], "count") or 0) if rows else 0
    logger.info(f"Papers in namespace: {count}")

    if search:
        response = await pipeline.search(search)
        logger.info(f"Search {search!r}: {len(response.items)} items")
        for item in response.items:
            logger.info(f"  [{item.id}] {item.title} ({item.year or '-'}) {item.authors_text}")

    return count


def main():
    parser = argparse.ArgumentParser(description="Probe the paper graph SPARQL endpoint")
    parser.add_argument(
        "--search",
        type=str,
        default=None,
        help="Free-text query to run through the search pipeline",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging (prints generated queries' row counts)",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        count = asyncio.run(probe(args.search))
    except RdfSearchError as e:
        logger.error(f"Probe failed: {e}")
        sys.exit(1)

    if count == 0:
        logger.warning("No papers found; check SPARQL_ENDPOINT and the dataset")
        sys.exit(2)


if __name__ == "__main__":
    main()
