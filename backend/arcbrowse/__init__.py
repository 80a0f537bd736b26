"""arcbrowse: read-only HTTP browser over a directory tree and its archives."""

__version__ = "0.1.0"
