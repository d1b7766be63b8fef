import json
from datetime import datetime, timezone

from unixar import Entry, EntryHeader, read_archive
from unixar.models import ArchiveManifest, EntryInfo, mtime_to_datetime

SAMPLE = (
    b"!<arch>\n"
    b"foo.txt         1487552916  501   20    100644  7         `\n"
    b"foobar\n\n"
    b"baz.txt         1487552349  42    12345 100755  4         `\n"
    b"baz\n"
)


def make_entry(identifier, mtime=1487552916):
    header = EntryHeader(
        identifier=identifier, mtime=mtime, uid=0, gid=0, mode=0o100644, size=0
    )
    return Entry(header=header, data=b"", offset=8)


def test_mtime_to_datetime():
    assert mtime_to_datetime(0) == datetime(1970, 1, 1, tzinfo=timezone.utc)
    assert mtime_to_datetime(1487552916) == datetime(
        2017, 2, 20, 1, 8, 36, tzinfo=timezone.utc
    )


def test_mtime_to_datetime_out_of_range():
    assert mtime_to_datetime(999999999999) == 999999999999


def test_entry_info_from_entry():
    info = EntryInfo.from_entry(read_archive(SAMPLE).entries[0])
    assert info.name == "foo.txt"
    assert info.name_bytes is None
    assert info.mtime == datetime(2017, 2, 20, 1, 8, 36, tzinfo=timezone.utc)
    assert (info.uid, info.gid) == (501, 20)
    assert info.mode == 0o100644
    assert info.filemode == "-rw-r--r--"
    assert info.size == 7
    assert info.offset == 8


def test_entry_info_non_ascii_name():
    info = EntryInfo.from_entry(make_entry(b"caf\xe9.txt"))
    assert info.name is None
    assert info.name_bytes == b"caf\xe9.txt"

    dumped = json.loads(info.model_dump_json())
    assert dumped["name_bytes"] == "Y2Fm6S50eHQ="

    loaded = EntryInfo.model_validate_json(info.model_dump_json())
    assert loaded.name_bytes == b"caf\xe9.txt"


def test_entry_info_large_mtime():
    info = EntryInfo.from_entry(make_entry(b"future", mtime=999999999999))
    assert info.mtime == 999999999999
    assert json.loads(info.model_dump_json())["mtime"] == 999999999999


def test_archive_manifest():
    manifest = ArchiveManifest.from_archive(read_archive(SAMPLE))
    dumped = json.loads(manifest.model_dump_json(exclude_none=True))
    assert [info["name"] for info in dumped] == ["foo.txt", "baz.txt"]
    assert "name_bytes" not in dumped[0]
    assert dumped[1]["filemode"] == "-rwxr-xr-x"
    assert dumped[1]["offset"] == 76
    assert dumped[1]["mtime"].startswith("2017-02-20T")


def test_archive_manifest_empty():
    manifest = ArchiveManifest.from_archive(read_archive(b"!<arch>\n"))
    assert manifest.root == []
    assert manifest.model_dump_json() == "[]"
