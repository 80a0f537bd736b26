"""Catch-all browse endpoint: every URL path names an entry under the root."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from arcbrowse.api.deps import get_dispatcher
from arcbrowse.errors import BrowseError
from arcbrowse.schemas.files import ErrorEnvelope
from arcbrowse.services.dispatcher import RequestDispatcher

logger = logging.getLogger(__name__)
router = APIRouter()

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


@router.api_route("/{path:path}", methods=ALL_METHODS, include_in_schema=False)
async def browse(
    request: Request,
    path: str,
    action: str | None = None,
    extract: str | None = None,
    download: str | None = None,
    dispatcher: RequestDispatcher = Depends(get_dispatcher),
):
    """List, stat, inspect, list archive contents, extract, or download.

    Failures are reported in-band: HTTP 200 with ``{"error": "..."}``.
    """
    try:
        return await dispatcher.handle(path, action=action, extract=extract, download=download)
    except BrowseError as e:
        logger.info("%s /%s?action=%s failed (%s): %s", request.method, path, action, e.kind, e.message)
        return JSONResponse(ErrorEnvelope(error=e.message).model_dump())
