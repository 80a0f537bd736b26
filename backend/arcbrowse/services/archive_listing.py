"""Parser for the fixed-column table printed by ``7z l``.

The listing looks like::

    7-Zip [64] 16.02 : Copyright (c) 1999-2016 Igor Pavlov : 2016-05-21
    ...
       Date      Time    Attr         Size   Compressed  Name
    ------------------- ----- ------------ ------------  ------------------------
    2020-01-02 03:04:05 ....A           11           13  readme.md
    ------------------- ----- ------------ ------------  ------------------------
    2020-01-02 03:04:05                 11           13  1 files

The first ruler fixes the column widths; every line up to the second ruler
is a member row. A line in that range that does not fit the columns still
yields a record, left empty.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from enum import Enum
from typing import Iterable

from arcbrowse.schemas.files import ZERO_TIME, FileRecord

logger = logging.getLogger(__name__)

HEADER_RE = re.compile(r"Date\s+Time\s+Attr\s+Size\s+Compressed\s+Name")
RULER_RE = re.compile(r"^(-+)\s+(-+)\s+(-+)\s+(-+)\s+(-+)$")

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2} [0-9]{2}:[0-9]{2}:[0-9]{2}")
SIZE_RE = re.compile(r"[0-9]+")
INT64_MAX = 2**63 - 1


class ParseState(str, Enum):
    START = "start"
    FIELDS = "fields"
    FILES = "files"
    END = "end"


def _parse_mtime(value: str) -> datetime:
    value = value.strip()
    # strptime alone also accepts unpadded fields
    if not DATE_RE.fullmatch(value):
        return ZERO_TIME
    try:
        return datetime.strptime(value, DATE_FORMAT).replace(tzinfo=timezone.utc)
    except ValueError:
        return ZERO_TIME


def _parse_size(value: str) -> int:
    value = value.strip()
    if not SIZE_RE.fullmatch(value):
        return 0
    size = int(value)
    return size if size <= INT64_MAX else 0


class ListingParser:
    """Incremental listing parser; feed lines without their newline."""

    def __init__(self):
        self._state = ParseState.START
        self._row_re: re.Pattern[str] | None = None
        self._records: list[FileRecord] = []
        self._pending_newline = True

    @property
    def state(self) -> ParseState:
        return self._state

    @property
    def records(self) -> list[FileRecord]:
        return self._records

    def feed(self, line: str) -> None:
        if self._state == ParseState.START:
            if HEADER_RE.search(line):
                self._state = ParseState.FIELDS

        elif self._state == ParseState.FIELDS:
            ruler = RULER_RE.match(line)
            if ruler:
                widths = [len(ruler.group(i)) for i in range(1, 5)]
                self._row_re = re.compile(
                    r"^(.{%d})\s+(.{%d})\s+(.{%d})\s+(.{%d})\s+(.+)$" % tuple(widths)
                )
                self._state = ParseState.FILES

        elif self._state == ParseState.FILES:
            if RULER_RE.match(line):
                self._state = ParseState.END
                return
            self._records.append(self._parse_row(line))

    def feed_chunk(self, chunk: str) -> None:
        """Feed a raw line as read from the tool, newline included."""
        self._pending_newline = chunk.endswith("\n")
        self.feed(chunk[:-1] if self._pending_newline else chunk)

    def close(self) -> list[FileRecord]:
        """Finish input read through :meth:`feed_chunk`.

        Output ending in a newline (or no output at all) has one more,
        empty, line after it.
        """
        if self._pending_newline:
            self.feed("")
            self._pending_newline = False
        return self._records

    def _parse_row(self, line: str) -> FileRecord:
        record = FileRecord()
        row = self._row_re.match(line) if self._row_re else None
        if row is None:
            logger.debug("Unparseable listing row: %r", line)
            return record
        record.mtime = _parse_mtime(row.group(1))
        record.size = _parse_size(row.group(3))
        record.filename = row.group(5)
        return record


def parse_lines(lines: Iterable[str]) -> list[FileRecord]:
    parser = ListingParser()
    for line in lines:
        parser.feed(line)
    return parser.records


def parse_listing(output: str) -> list[FileRecord]:
    """Parse the complete output of ``7z l``."""
    return parse_lines(output.split("\n"))
