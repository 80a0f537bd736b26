"""Chunked file streaming for download responses."""

from __future__ import annotations

import logging
import mimetypes
from typing import BinaryIO, Iterator

from arcbrowse.schemas.files import ErrorEnvelope

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024  # 64 KB


def iter_file(f: BinaryIO, chunk_size: int = CHUNK_SIZE) -> Iterator[bytes]:
    """Yield the file in chunks and close it.

    A read error after the first chunk cannot change the response status
    any more, so the error envelope is appended to the body instead.
    """
    try:
        while chunk := f.read(chunk_size):
            yield chunk
    except OSError as e:
        logger.warning("Read failed mid-stream on %s: %s", getattr(f, "name", "?"), e)
        yield (ErrorEnvelope(error=str(e)).model_dump_json() + "\n").encode()
    finally:
        f.close()


def content_disposition(filename: str, download: str | None) -> str:
    disposition = "attachment" if download == "true" else "inline"
    return f'{disposition}; filename="{filename}"'


def guess_media_type(filename: str) -> str:
    media_type, _ = mimetypes.guess_type(filename)
    return media_type or "application/octet-stream"
