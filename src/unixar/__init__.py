"""Common Variant ``ar`` archive reader"""
from .errors import (
    ArError,
    ArParseError,
    InvalidNumericField,
    MalformedSignature,
    MissingTerminator,
    TrailingGarbage,
    TruncatedHeader,
    TruncatedPayload,
)
from .parse.archive import (
    Archive,
    Entry,
    EntryHeader,
    is_archive,
    iter_entries,
    read_archive,
)

__version__ = "0.1.0"

__all__ = [
    "ArError",
    "ArParseError",
    "Archive",
    "Entry",
    "EntryHeader",
    "InvalidNumericField",
    "MalformedSignature",
    "MissingTerminator",
    "TrailingGarbage",
    "TruncatedHeader",
    "TruncatedPayload",
    "is_archive",
    "iter_entries",
    "read_archive",
]
