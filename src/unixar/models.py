"""Describe decoded archives as JSON-friendly metadata.

This is a listing of the entries, not a serialization format: entry data is
never included, and there is no way back from a manifest to an archive.
"""
from __future__ import annotations

from base64 import b64decode, b64encode
from datetime import datetime, timezone
from typing import Any, List, Optional, Union

from pydantic import BaseModel, RootModel, field_serializer, field_validator

from .parse.archive import Archive, Entry

Timestamp = Union[int, datetime]


def mtime_to_datetime(mtime: int) -> Timestamp:
    try:
        return datetime.fromtimestamp(mtime, timezone.utc)
    except (OverflowError, OSError, ValueError):
        # twelve digits can go far past the year 9999, which python can't store
        return mtime


class EntryInfo(BaseModel):
    name: Optional[str] = None
    name_bytes: Optional[bytes] = None
    mtime: Timestamp
    uid: int
    gid: int
    mode: int
    filemode: str
    size: int
    offset: int = 0

    @field_validator("name_bytes", mode="before")
    @classmethod
    def _name_bytes_from_base64(cls, value: Any) -> Any:
        if isinstance(value, str):
            return b64decode(value)
        return value

    @field_serializer("name_bytes")
    def _name_bytes_to_base64(self, value: Optional[bytes]) -> Optional[str]:
        if value is None:
            return None
        return b64encode(value).decode("ascii")

    @classmethod
    def from_entry(cls, entry: Entry) -> EntryInfo:
        header = entry.header
        name: Optional[str] = None
        name_bytes: Optional[bytes] = None
        try:
            name = header.name
        except UnicodeDecodeError:
            name_bytes = header.identifier
        return cls(
            name=name,
            name_bytes=name_bytes,
            mtime=mtime_to_datetime(header.mtime),
            uid=header.uid,
            gid=header.gid,
            mode=header.mode,
            filemode=header.filemode,
            size=header.size,
            offset=entry.offset,
        )


class ArchiveManifest(RootModel[List[EntryInfo]]):
    @classmethod
    def from_archive(cls, archive: Archive) -> ArchiveManifest:
        return cls(root=[EntryInfo.from_entry(entry) for entry in archive])
