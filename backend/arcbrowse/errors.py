"""Browse errors: each carries the message shown to the client."""

from __future__ import annotations


class BrowseError(Exception):
    """Base class for failures reported in an ErrorEnvelope."""

    kind = "browse-error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class PathNotFoundError(BrowseError):
    kind = "path-not-found-or-inaccessible"


class CannotOpenDirectoryError(BrowseError):
    kind = "cannot-open-directory"

    def __init__(self, message: str = "Cannot open directory"):
        super().__init__(message)


class ExtractRequiredError(BrowseError):
    kind = "extract-required"

    def __init__(self, message: str = "Extract required"):
        super().__init__(message)


class ToolUnavailableError(BrowseError):
    kind = "tool-unavailable"


class ToolIOError(BrowseError):
    kind = "tool-io"


class OpenFailedError(BrowseError):
    kind = "open-failed"
