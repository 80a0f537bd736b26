"""Business logic services: singleton registry."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from arcbrowse.config import settings

if TYPE_CHECKING:
    from arcbrowse.services.external_tools import ExternalTools

logger = logging.getLogger(__name__)

_external_tools: ExternalTools | None = None


def init_services() -> None:
    """Create the service singletons."""
    global _external_tools

    from arcbrowse.services.external_tools import ExternalTools

    _external_tools = ExternalTools()
    logger.info(
        "Host tools: classifier=%r archive=%r",
        settings.classifier_command,
        settings.archive_command,
    )


def shutdown_services() -> None:
    global _external_tools
    _external_tools = None


def get_external_tools() -> ExternalTools:
    if _external_tools is None:
        raise RuntimeError("Services not initialized, call init_services() first")
    return _external_tools
