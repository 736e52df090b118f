"""Plain-text editing core: encodings, line endings, file I/O, search, documents and pagination."""

__version__ = "0.8.19"

__all__ = ["document", "encoding", "fileio", "paging", "textsearch"]