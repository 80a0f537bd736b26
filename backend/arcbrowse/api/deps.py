"""FastAPI dependency injection: host tools & dispatcher."""

from __future__ import annotations

from fastapi import Depends, Request

from arcbrowse.services import get_external_tools
from arcbrowse.services.dispatcher import RequestDispatcher
from arcbrowse.services.external_tools import ExternalTools


def get_tools() -> ExternalTools:
    return get_external_tools()


def get_dispatcher(
    request: Request,
    tools: ExternalTools = Depends(get_tools),
) -> RequestDispatcher:
    """Dispatcher bound to the root this app was created for."""
    return RequestDispatcher(root=request.app.state.root_dir, tools=tools)
