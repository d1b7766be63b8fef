from contextlib import contextmanager
from typing import Any, Iterator, Type, TypeVar, Union

from typing_extensions import Protocol

T = TypeVar("T", bound="Comparable")


class Comparable(Protocol):
    def __lt__(self: T, other: T) -> bool:
        pass  # pragma: no cover

    def __le__(self: T, other: T) -> bool:
        pass  # pragma: no cover

    def __gt__(self: T, other: T) -> bool:
        pass  # pragma: no cover

    def __ge__(self: T, other: T) -> bool:
        pass  # pragma: no cover


class ArError(Exception):
    """Base error for all errors in the library."""


class ArParseError(ArError):
    """An error when parsing archive data."""


class MalformedSignature(ArParseError):
    """The archive does not start with the ``!<arch>\\n`` magic."""


class TruncatedHeader(ArParseError):
    """Fewer than 60 bytes remain where an entry header is expected."""


class TrailingGarbage(TruncatedHeader):
    """Bytes remain after the last entry, but too few to form a header."""


class InvalidNumericField(ArParseError):
    """A numeric header field is empty or not a number in its radix."""


class MissingTerminator(ArParseError):
    """An entry header does not end with the ``\\`\\n`` terminator."""


class TruncatedPayload(ArParseError):
    """Fewer bytes remain than the entry header's declared size."""


def _assert_base(  # pylint: disable=too-many-arguments
    result: bool,
    operator: str,
    name: str,
    expected: Any,
    actual: Any,
    location: Union[int, str],
    error_class: Type[ArError] = ArParseError,
) -> None:
    if not result:
        raise error_class(f"{name}: {actual!r} {operator} {expected!r} (at {location})")


def assert_eq(
    name: str,
    expected: T,
    actual: T,
    location: Union[int, str],
    error_class: Type[ArError] = ArParseError,
) -> None:
    result = actual == expected
    _assert_base(result, "==", name, expected, actual, location, error_class)


def assert_ge(
    name: str,
    expected: T,
    actual: T,
    location: Union[int, str],
    error_class: Type[ArError] = ArParseError,
) -> None:
    result = actual >= expected
    _assert_base(result, ">=", name, expected, actual, location, error_class)


@contextmanager
def assert_number(
    name: str,
    actual: bytes,
    location: Union[int, str],
    error_class: Type[ArError] = InvalidNumericField,
) -> Iterator[None]:
    try:
        yield
    except ValueError as e:
        raise error_class(f"{name}: {actual!r} is not a number ({e}) (at {location})") from e
