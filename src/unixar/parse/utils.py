from struct import Struct
from typing import Any, Tuple, Type

from ..errors import ArError, ArParseError, assert_ge

DECIMAL_DIGITS = b"0123456789"


def strip_space_padding(buf: bytes) -> bytes:
    """Return a buffer without its trailing space (0x20) padding.

    Only spaces are removed, and only from the right. A buffer consisting
    entirely of spaces yields an empty result.
    """
    return buf.rstrip(b" ")


def parse_number(buf: bytes, radix: int) -> int:
    """Return the value of an ASCII-encoded, space-padded unsigned number.

    Trailing ASCII whitespace is ignored. Everything before it must be a digit
    of the radix: no sign, no leading whitespace, no underscores.

    :raises ValueError: If the number is empty or contains invalid characters.
    """
    if not 2 <= radix <= 10:  # pragma: no cover
        raise ValueError(f"Unsupported radix {radix}")

    digits = DECIMAL_DIGITS[:radix]
    text = buf.rstrip()
    if not text:
        raise ValueError("Empty number")
    if not all(c in digits for c in text):
        raise ValueError(f"Invalid base {radix} digits ({text!r})")
    return int(text, radix)


class BinReader:
    def __init__(self, data: bytes):
        self.data = data
        self.offset = 0
        self.prev = 0

    def __len__(self) -> int:
        return len(self.data)

    @property
    def remaining(self) -> int:
        return len(self.data) - self.offset

    def peek(self, length: int) -> bytes:
        return bytes(self.data[self.offset : self.offset + length])

    def read(
        self, struct: Struct, name: str, error_class: Type[ArError] = ArParseError
    ) -> Tuple[Any, ...]:
        assert_ge(f"{name} length", struct.size, self.remaining, self.offset, error_class)
        values = struct.unpack_from(self.data, self.offset)
        self.prev = self.offset
        self.offset += struct.size
        return values

    def read_bytes(
        self, length: int, name: str, error_class: Type[ArError] = ArParseError
    ) -> bytes:
        assert_ge(f"{name} length", length, self.remaining, self.offset, error_class)
        self.prev = self.offset
        self.offset += length
        value = self.data[self.prev : self.offset]
        return bytes(value)

    def skip_while(self, byte: int) -> int:
        start = self.offset
        end = len(self.data)
        while self.offset < end and self.data[self.offset] == byte:
            self.offset += 1
        return self.offset - start
