"""Tests for file streaming helpers."""

import io
import json

from arcbrowse.utils.streaming import content_disposition, guess_media_type, iter_file


class _FailingReader(io.BytesIO):
    """Returns the first chunk, then fails."""

    def __init__(self):
        super().__init__(b"abc")
        self.reads = 0

    def read(self, size=-1):
        self.reads += 1
        if self.reads > 1:
            raise OSError("Input/output error")
        return super().read(size)


def test_chunks_and_closes():
    f = io.BytesIO(b"abcdefg")
    assert list(iter_file(f, chunk_size=3)) == [b"abc", b"def", b"g"]
    assert f.closed


def test_empty_file():
    assert list(iter_file(io.BytesIO(b""))) == []


def test_error_appended_mid_stream():
    f = _FailingReader()
    chunks = list(iter_file(f, chunk_size=3))
    assert chunks[0] == b"abc"
    assert json.loads(chunks[1]) == {"error": "Input/output error"}
    assert f.closed


def test_content_disposition():
    assert content_disposition("hello.txt", None) == 'inline; filename="hello.txt"'
    assert content_disposition("hello.txt", "false") == 'inline; filename="hello.txt"'
    assert content_disposition("hello.txt", "TRUE") == 'inline; filename="hello.txt"'
    assert content_disposition("hello.txt", "true") == 'attachment; filename="hello.txt"'


def test_guess_media_type():
    assert guess_media_type("hello.txt") == "text/plain"
    assert guess_media_type("no-extension") == "application/octet-stream"
