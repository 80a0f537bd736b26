"""File schemas: the JSON shapes returned by the browse endpoint."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel

# Timestamp reported when no modification time is known
ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)


class FileRecord(BaseModel):
    """A file, a directory (optionally with its children) or an archive member."""
    directory: bool = False
    filename: str = ""
    size: int = 0
    mtime: datetime = ZERO_TIME
    files: list[FileRecord] | None = None


class ErrorEnvelope(BaseModel):
    error: str


class InspectEnvelope(BaseModel):
    """Verbatim output of the type classifier."""
    file: str


class ContentsEnvelope(BaseModel):
    """Archive members, one record per listing row."""
    files: list[FileRecord]
    lines: list[str] = []
