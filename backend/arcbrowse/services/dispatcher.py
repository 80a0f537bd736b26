"""Request dispatch: picks a handler arm from path kind and ``action``."""

from __future__ import annotations

import logging
import os
import shutil
import stat
from datetime import datetime, timezone

from fastapi.responses import JSONResponse, StreamingResponse
from starlette.background import BackgroundTask
from starlette.responses import Response

from arcbrowse.config import settings
from arcbrowse.errors import (
    CannotOpenDirectoryError,
    ExtractRequiredError,
    OpenFailedError,
)
from arcbrowse.schemas.files import ContentsEnvelope, FileRecord, InspectEnvelope
from arcbrowse.services.archive_listing import ListingParser
from arcbrowse.services.external_tools import ExternalTools
from arcbrowse.services.path_resolver import join_root, stat_path
from arcbrowse.utils.streaming import content_disposition, guess_media_type, iter_file

logger = logging.getLogger(__name__)

DIRECTORY_ACTIONS = ("list", "stat")


def _mtime(st: os.stat_result) -> datetime:
    return datetime.fromtimestamp(st.st_mtime, tz=timezone.utc)


def _basename(path: str) -> str:
    return os.path.basename(os.path.normpath(path))


def _json(model) -> JSONResponse:
    return JSONResponse(model.model_dump(mode="json"))


def _discard_scratch(scratch: str) -> None:
    if settings.cleanup_scratch:
        shutil.rmtree(scratch, ignore_errors=True)


class RequestDispatcher:
    """Serves one browsed root. Holds no per-request state."""

    def __init__(self, root: str, tools: ExternalTools):
        self.root = root
        self.tools = tools

    async def handle(
        self,
        url_path: str,
        action: str | None = None,
        extract: str | None = None,
        download: str | None = None,
    ) -> Response:
        """Build the response for one request; raises BrowseError on failure."""
        full_path = join_root(self.root, url_path)
        st = stat_path(full_path)

        if stat.S_ISDIR(st.st_mode):
            if action not in DIRECTORY_ACTIONS:
                raise CannotOpenDirectoryError()
            return _json(self.list_directory(full_path, st))

        if action == "stat":
            return _json(FileRecord(
                directory=False,
                filename=_basename(full_path),
                size=st.st_size,
            ))
        if action == "inspect":
            return _json(InspectEnvelope(file=await self.tools.classify(full_path)))
        if action == "contents":
            return _json(await self.archive_contents(full_path))
        if action == "extract":
            return await self.extract_member(full_path, extract, download)
        return self.stream_file(full_path, _basename(full_path), download)

    def list_directory(self, path: str, st: os.stat_result) -> FileRecord:
        """Directory record with one child per entry.

        Children report the directory's own mtime, not theirs.
        """
        dir_mtime = _mtime(st)
        try:
            with os.scandir(path) as it:
                entries = sorted(it, key=lambda e: e.name)
            children = [
                FileRecord(
                    directory=entry.is_dir(follow_symlinks=False),
                    filename=entry.name,
                    size=entry.stat(follow_symlinks=False).st_size,
                    mtime=dir_mtime,
                )
                for entry in entries
            ]
        except OSError as e:
            raise OpenFailedError(str(e)) from e

        return FileRecord(
            directory=True,
            filename=_basename(path),
            size=st.st_size,
            mtime=dir_mtime,
            files=children,
        )

    async def archive_contents(self, path: str) -> ContentsEnvelope:
        parser = ListingParser()
        async for chunk in self.tools.iter_archive_list(path):
            parser.feed_chunk(chunk)
        files = parser.close()
        logger.debug("Listed %d archive entries in %s", len(files), path)
        return ContentsEnvelope(files=files, lines=[])

    async def extract_member(
        self, archive_path: str, member: str | None, download: str | None,
    ) -> Response:
        if not member:
            raise ExtractRequiredError()

        try:
            scratch = self.tools.make_scratch_dir()
        except OSError as e:
            raise OpenFailedError(f"Cannot create extraction directory: {e}") from e

        try:
            extracted = await self.tools.archive_extract(archive_path, member, scratch)
            f = open(extracted, "rb")
        except (OSError, ValueError) as e:
            _discard_scratch(scratch)
            raise OpenFailedError(str(e)) from e
        except BaseException:
            _discard_scratch(scratch)
            raise

        filename = _basename(member)
        cleanup = None
        if settings.cleanup_scratch:
            cleanup = BackgroundTask(shutil.rmtree, scratch, ignore_errors=True)
        return StreamingResponse(
            iter_file(f, settings.stream_chunk_size),
            media_type=guess_media_type(filename),
            headers={"Content-Disposition": content_disposition(filename, download)},
            background=cleanup,
        )

    def stream_file(self, path: str, filename: str, download: str | None) -> Response:
        try:
            f = open(path, "rb")
        except (OSError, ValueError) as e:
            raise OpenFailedError(str(e)) from e

        return StreamingResponse(
            iter_file(f, settings.stream_chunk_size),
            media_type=guess_media_type(filename),
            headers={"Content-Disposition": content_disposition(filename, download)},
        )
