"""Restructure endpoints for the API."""

from __future__ import annotations

import asyncio

from fastapi import APIRouter, HTTPException, status

from guidetiles.exceptions import ConfigurationError, GuideNotFoundError, StoreError
from guidetiles.report import summarize_body
from guidetiles.restructure import restructure_guide
from guidetiles.schemas import RestructureResult
from guidetiles.transform import transform_document
from guidetiles.utils.logging_config import get_logger
from server.models import ErrorResponse, RestructureRequest, RestructureResponse, TransformOptionsModel

logger = get_logger(__name__)

router = APIRouter()

COMMON_ERROR_RESPONSES = {
    status.HTTP_404_NOT_FOUND: {"model": ErrorResponse, "description": "Guide not found"},
    status.HTTP_502_BAD_GATEWAY: {"model": ErrorResponse, "description": "Backend request failed"},
    status.HTTP_503_SERVICE_UNAVAILABLE: {"model": ErrorResponse, "description": "Backend not configured"},
}


@router.post("/api/restructure", response_model=RestructureResponse)
async def api_restructure(request: RestructureRequest) -> RestructureResponse:
    """Restructure a markdown body supplied in the request.

    **Parameters**

    - **request** (`RestructureRequest`): the body plus optional transform options

    **Returns**

    - **RestructureResponse**: the restructured body, its title line and tile count

    """
    options = request.to_options()
    result = await asyncio.to_thread(transform_document, request.body, options)
    return RestructureResponse(
        body=result.body,
        title=result.title,
        tile_count=len(result.tiles),
        summary=summarize_body(request.body, result.body, options.container_open),
    )


@router.post(
    "/api/guides/{slug}/restructure",
    response_model=RestructureResult,
    responses=COMMON_ERROR_RESPONSES,
)
async def api_restructure_guide(
    slug: str,
    dry_run: bool = False,
    options: TransformOptionsModel | None = None,
) -> RestructureResult:
    """Restructure a stored guide and save the result.

    **Path Parameters**
    - **slug** (`str`): slug of the guide

    **Query Parameters**
    - **dry_run** (`bool`, optional): compute the new body without saving it

    **Raises**

    - **HTTPException**: **404** - no guide has this slug
    - **HTTPException**: **502** - the backend request failed
    - **HTTPException**: **503** - backend credentials are not configured

    """
    tile_options = (options or TransformOptionsModel()).to_options()
    try:
        return await restructure_guide(slug, options=tile_options, dry_run=dry_run)
    except GuideNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ConfigurationError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    except StoreError as exc:
        logger.error("Guide restructure failed", extra={"slug": slug, "error": str(exc)})
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc
