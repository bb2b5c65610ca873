"""
API route definitions.

This module defines the HTTP endpoints for the search system:
- GET /api/search - Search papers by free-text query (``q``) or title (``title``)
- GET /api/paper - Fetch paper details by identifier (``id``)

Both handlers answer failures with a ``{"error": ...}`` body: known errors
use the status carried by the exception, anything else is a 500.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from rdf_search.core.errors import RdfSearchError
from rdf_search.core.schemas import ErrorResponse, PaperDetails, SearchResponse
from rdf_search.retrieval.pipeline import SEARCH_MODE_QUERY, SEARCH_MODE_TITLE, SearchPipeline

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def get_pipeline(request: Request) -> SearchPipeline:
    return request.app.state.pipeline


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _handle_failure(exc: Exception, action: str) -> JSONResponse:
    if isinstance(exc, RdfSearchError):
        if exc.status_code >= 500:
            logger.error(f"{action} failed: {exc}")
        return error_response(exc.status_code, str(exc))
    logger.exception(f"{action} failed")
    return error_response(500, str(exc) or "Unknown error")


@router.get(
    "/search",
    response_model=SearchResponse,
    response_model_exclude_none=True,
    responses=ERROR_RESPONSES,
)
async def search(
    q: Optional[str] = Query(None, description="Free-text query: title, author:, year:, or id:"),
    title: Optional[str] = Query(None, description="Legacy title-only query"),
    pipeline: SearchPipeline = Depends(get_pipeline),
):
    """Search papers; ``q`` takes precedence over ``title``."""
    if q:
        raw, mode = q, SEARCH_MODE_QUERY
    else:
        raw, mode = title or "", SEARCH_MODE_TITLE

    try:
        return await pipeline.search(raw, mode)
    except Exception as e:
        return _handle_failure(e, "Search")


@router.get("/paper", response_model=PaperDetails, responses=ERROR_RESPONSES)
async def paper(
    paper_id: Optional[str] = Query(None, alias="id", description="Paper identifier (segment after /ris/)"),
    pipeline: SearchPipeline = Depends(get_pipeline),
):
    """Fetch the details of a single paper."""
    try:
        return await pipeline.get_paper(paper_id)
    except Exception as e:
        return _handle_failure(e, "Paper lookup")
