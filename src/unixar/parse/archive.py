"""Read Common Variant ``ar`` archives.

An archive is the ``!<arch>\\n`` signature followed by entries. Each entry is a
60 byte header of space-padded ASCII fields, the payload, and optional newline
padding (usually a single byte, to align the next header to an even offset).

Long name tables (BSD/GNU) and symbol tables are not decoded. Such members are
returned like any other entry, so ``/``, ``//`` or ``__.SYMDEF`` may show up as
identifiers.
"""
import logging
import stat
from dataclasses import dataclass, field
from struct import Struct
from typing import Iterator, List

from ..errors import (
    InvalidNumericField,
    MalformedSignature,
    MissingTerminator,
    TrailingGarbage,
    TruncatedHeader,
    TruncatedPayload,
    assert_eq,
    assert_ge,
    assert_number,
)
from .utils import BinReader, parse_number, strip_space_padding

SIGNATURE = b"!<arch>\n"
TERMINATOR = b"`\n"
PADDING = ord("\n")

# identifier, mtime, uid, gid, mode, size, terminator
HEADER = Struct("16s 12s 6s 6s 8s 10s 2s")
assert HEADER.size == 60, HEADER.size

MTIME_OFFSET = 16
UID_OFFSET = 28
GID_OFFSET = 34
MODE_OFFSET = 40
SIZE_OFFSET = 48
TERMINATOR_OFFSET = 58

LOG = logging.getLogger(__name__)


@dataclass(frozen=True)
class EntryHeader:
    identifier: bytes
    mtime: int
    uid: int
    gid: int
    mode: int
    size: int

    @property
    def name(self) -> str:
        return self.identifier.decode("ascii")

    @property
    def filemode(self) -> str:
        return stat.filemode(self.mode)


@dataclass(frozen=True)
class Entry:
    header: EntryHeader
    data: bytes
    # where the header starts in the archive, for diagnostics only
    offset: int = field(default=0, compare=False)


@dataclass(frozen=True)
class Archive:
    entries: List[Entry]
    trailing: bytes = b""

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self.entries)


def is_archive(data: bytes) -> bool:
    return bytes(data[: len(SIGNATURE)]) == SIGNATURE


def read_signature(reader: BinReader) -> bytes:
    # check before reading, so a bad signature doesn't move the reader
    signature = reader.peek(len(SIGNATURE))
    assert_eq("archive signature", SIGNATURE, signature, reader.offset, MalformedSignature)
    return reader.read_bytes(len(SIGNATURE), "archive signature", MalformedSignature)


def _read_number(name: str, raw: bytes, radix: int, location: int) -> int:
    with assert_number(name, raw, location, InvalidNumericField):
        return parse_number(raw, radix)


def read_entry_header(reader: BinReader) -> EntryHeader:
    (
        raw_identifier,
        raw_mtime,
        raw_uid,
        raw_gid,
        raw_mode,
        raw_size,
        terminator,
    ) = reader.read(HEADER, "entry header", TruncatedHeader)
    start = reader.prev

    # may be empty, if the identifier is all spaces
    identifier = strip_space_padding(raw_identifier)
    mtime = _read_number("entry mtime", raw_mtime, 10, start + MTIME_OFFSET)
    uid = _read_number("entry uid", raw_uid, 10, start + UID_OFFSET)
    gid = _read_number("entry gid", raw_gid, 10, start + GID_OFFSET)
    mode = _read_number("entry mode", raw_mode, 8, start + MODE_OFFSET)
    size = _read_number("entry size", raw_size, 10, start + SIZE_OFFSET)
    assert_eq(
        "entry terminator",
        TERMINATOR,
        terminator,
        start + TERMINATOR_OFFSET,
        MissingTerminator,
    )

    return EntryHeader(
        identifier=identifier, mtime=mtime, uid=uid, gid=gid, mode=mode, size=size
    )


def read_entry_data(reader: BinReader, size: int) -> bytes:
    return reader.read_bytes(size, "entry data", TruncatedPayload)


def skip_padding(reader: BinReader) -> int:
    return reader.skip_while(PADDING)


def read_entry(reader: BinReader) -> Entry:
    offset = reader.offset
    header = read_entry_header(reader)
    LOG.debug(
        "Entry %r, %d bytes, header at %d", header.identifier, header.size, offset
    )
    data = read_entry_data(reader, header.size)
    padding = skip_padding(reader)
    if padding:
        LOG.debug("Skipped %d padding byte(s) at %d", padding, reader.offset - padding)
    return Entry(header=header, data=data, offset=offset)


def iter_entries(data: bytes) -> Iterator[Entry]:
    """Yield the entries of an archive in order, as they are read.

    Errors are raised when the malformed part of the archive is reached, so
    entries before it will already have been yielded. Use :func:`read_archive`
    if only a complete archive is useful.

    :raises MalformedSignature: If the data doesn't start with the signature.
    :raises TruncatedHeader: If a header is cut short.
    :raises TrailingGarbage: If too few bytes follow the last entry to form a
        header.
    :raises InvalidNumericField: If a numeric header field is invalid.
    :raises MissingTerminator: If a header terminator is invalid.
    :raises TruncatedPayload: If an entry's data is cut short.
    """
    reader = BinReader(data)
    LOG.debug("Reading archive data...")
    read_signature(reader)

    count = 0
    while reader.remaining:
        if count:
            assert_ge(
                "trailing data length",
                HEADER.size,
                reader.remaining,
                reader.offset,
                TrailingGarbage,
            )
        yield read_entry(reader)
        count += 1

    LOG.debug("Read archive data, %d entries", count)


def read_archive(data: bytes) -> Archive:
    """Read a complete archive.

    The entire buffer must be consumed; there is no partial result on error.
    See :func:`iter_entries` for the errors raised.
    """
    return Archive(entries=list(iter_entries(data)))
