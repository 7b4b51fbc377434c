"""UUID value type: parsing, formatting and inspection (RFC 9562, DCE 1.1).

A UUID is an immutable 16 byte value that can be hashed, compared and
ordered lexicographically by its bytes.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import IntEnum
from typing import ClassVar, Iterable

_LILLIAN = 2299160  # Julian day of 15 Oct 1582
_UNIX = 2440587  # Julian day of 1 Jan 1970
_EPOCH_DAYS = _UNIX - _LILLIAN

#: Hundreds of nanoseconds between 15 Oct 1582 and 1 Jan 1970.
GREGORIAN_OFFSET = _EPOCH_DAYS * 86400 * 10_000_000

_TICKS_PER_SECOND = 10_000_000
_URN_PREFIX = b"urn:uuid:"
_HEX_DIGITS = frozenset(b"0123456789abcdefABCDEF")
_DASH_POSITIONS = (8, 13, 18, 23)
_HEX_GROUPS = ((0, 8), (9, 13), (14, 18), (19, 23), (24, 36))

_ESCAPES = {
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
    '"': '\\"',
    "\\": "\\\\",
}


def _quote(text: str) -> str:
    """Return text as a double-quoted literal with escapes for unprintables."""
    parts = []
    for ch in text:
        if ch in _ESCAPES:
            parts.append(_ESCAPES[ch])
        elif ch.isprintable():
            parts.append(ch)
        else:
            code = ord(ch)
            if code < 0x80:
                parts.append(f"\\x{code:02x}")
            elif code < 0x10000:
                parts.append(f"\\u{code:04x}")
            else:
                parts.append(f"\\U{code:08x}")
    return '"' + "".join(parts) + '"'


class UUIDError(ValueError):
    """Base class for UUID errors."""


class InvalidLengthError(UUIDError):
    """The text to parse has none of the accepted lengths."""

    def __init__(self, length: int) -> None:
        self.length = length
        super().__init__(f"invalid UUID length: {length}")


class URNPrefixError(UUIDError):
    """A 45 character UUID does not start with ``urn:uuid:``."""

    def __init__(self, prefix: str) -> None:
        self.prefix = prefix
        super().__init__(f"invalid urn prefix: {_quote(prefix)}")


class InvalidFormatError(UUIDError):
    """Hyphens are misplaced or a character is not a hex digit."""

    def __init__(self) -> None:
        super().__init__("invalid UUID format")


class InvalidBracketedFormatError(UUIDError):
    """A 38 character UUID is not enclosed in braces."""

    def __init__(self) -> None:
        super().__init__("invalid bracketed UUID format")


class Variant(IntEnum):
    """The variant field of a UUID."""

    INVALID = 0
    RFC4122 = 1
    RESERVED = 2
    MICROSOFT = 3
    FUTURE = 4
    STANDARD = 1

    def __str__(self) -> str:
        return _VARIANT_NAMES[self.value]


_VARIANT_NAMES = {
    0: "Invalid",
    1: "RFC4122",
    2: "Reserved",
    3: "Microsoft",
    4: "Future",
}


class Version(int):
    """The version of a UUID, a value from 0 to 255."""

    def __new__(cls, value: int = 0) -> "Version":
        version = int.__new__(cls, value)
        if not 0 <= version <= 0xFF:
            raise ValueError(f"version out of range: {int(version)}")
        return version

    def __str__(self) -> str:
        number = int(self)
        if number > 15:
            return f"BAD_VERSION_{number}"
        return f"VERSION_{number}"

    def __repr__(self) -> str:
        return f"Version({int(self)})"


class Domain(int):
    """A DCE Security (Version 2) domain, a value from 0 to 255."""

    PERSON: ClassVar["Domain"]
    GROUP: ClassVar["Domain"]
    ORG: ClassVar["Domain"]

    def __new__(cls, value: int = 0) -> "Domain":
        domain = int.__new__(cls, value)
        if not 0 <= domain <= 0xFF:
            raise ValueError(f"domain out of range: {int(domain)}")
        return domain

    def __str__(self) -> str:
        number = int(self)
        return _DOMAIN_NAMES.get(number, f"Domain{number}")

    def __repr__(self) -> str:
        return f"Domain({int(self)})"


_DOMAIN_NAMES = {0: "Person", 1: "Group", 2: "Org"}

Domain.PERSON = Domain(0)
Domain.GROUP = Domain(1)
Domain.ORG = Domain(2)
PERSON = Domain.PERSON
GROUP = Domain.GROUP
ORG = Domain.ORG


class Time(int):
    """A time as the number of 100 ns intervals since 15 Oct 1582."""

    def unix_time(self) -> tuple[int, int]:
        """Return (seconds, nanoseconds) since the Unix epoch.

        Division truncates toward zero, so both parts carry the sign of
        times before 1970.
        """
        delta = int(self) - GREGORIAN_OFFSET
        seconds, remainder = divmod(abs(delta), _TICKS_PER_SECOND)
        if delta < 0:
            seconds, remainder = -seconds, -remainder
        return seconds, remainder * 100


def _u16(data: bytes, offset: int) -> int:
    return int.from_bytes(data[offset:offset + 2], "big")


def _u32(data: bytes, offset: int) -> int:
    return int.from_bytes(data[offset:offset + 4], "big")


@dataclass(frozen=True, order=True, repr=False)
class UUID:
    """A 128 bit universally unique identifier."""

    data: bytes = bytes(16)

    def __post_init__(self) -> None:
        if isinstance(self.data, (str, int)):
            raise TypeError(f"UUID data must be bytes, not {type(self.data).__name__}")
        raw = bytes(self.data)
        if len(raw) != 16:
            raise UUIDError(f"invalid UUID (got {len(raw)} bytes)")
        object.__setattr__(self, "data", raw)

    def __str__(self) -> str:
        h = self.data.hex()
        return f"{h[0:8]}-{h[8:12]}-{h[12:16]}-{h[16:20]}-{h[20:32]}"

    def __repr__(self) -> str:
        return f"UUID('{self}')"

    def __bytes__(self) -> bytes:
        return self.data

    def urn(self) -> str:
        """Return the URN form, ``urn:uuid:xxxxxxxx-...``."""
        return "urn:uuid:" + str(self)

    def variant(self) -> Variant:
        """Return the variant encoded in the UUID."""
        octet = self.data[8]
        if octet & 0xC0 == 0x80:
            return Variant.RFC4122
        if octet & 0xE0 == 0xC0:
            return Variant.MICROSOFT
        if octet & 0xE0 == 0xE0:
            return Variant.FUTURE
        return Variant.RESERVED

    def version(self) -> Version:
        """Return the version encoded in the UUID."""
        return Version(self.data[6] >> 4)

    def node_id(self) -> bytes:
        """Return the 6 byte node id (meaningful for versions 1, 2 and 6)."""
        return self.data[10:16]

    def time(self) -> Time:
        """Return the encoded time (meaningful for versions 1, 2, 6 and 7)."""
        d = self.data
        version = self.version()
        if version == 6:
            ticks = (_u32(d, 0) << 28) | (_u16(d, 4) << 12) | (_u16(d, 6) & 0xFFF)
        elif version == 7:
            millis = int.from_bytes(d[:8], "big") >> 16
            ticks = millis * 10_000 + GREGORIAN_OFFSET
        else:
            ticks = _u32(d, 0) | (_u16(d, 4) << 32) | ((_u16(d, 6) & 0xFFF) << 48)
        return Time(ticks)

    def clock_sequence(self) -> int:
        """Return the 14 bit clock sequence (meaningful for versions 1 and 2)."""
        return _u16(self.data, 8) & 0x3FFF

    def domain(self) -> Domain:
        """Return the DCE domain (meaningful for version 2)."""
        return Domain(self.data[9])

    def id(self) -> int:
        """Return the DCE id (meaningful for version 2)."""
        return _u32(self.data, 0)

    def marshal_text(self) -> bytes:
        """Return the canonical text form as bytes."""
        return str(self).encode("ascii")

    @classmethod
    def unmarshal_text(cls, data: bytes | str) -> "UUID":
        """Parse a UUID from its text form."""
        return cls(parse_bytes(_as_bytes(data)).data)

    def marshal_binary(self) -> bytes:
        """Return the 16 raw bytes."""
        return self.data

    @classmethod
    def unmarshal_binary(cls, data: bytes) -> "UUID":
        """Build a UUID from exactly 16 raw bytes."""
        return cls(data)

    def marshal_json(self) -> bytes:
        """Return the UUID as a JSON string literal."""
        return json.dumps(str(self)).encode("ascii")

    @classmethod
    def unmarshal_json(cls, data: bytes | str) -> "UUID":
        """Decode a JSON string literal; JSON null gives the nil UUID."""
        value = json.loads(data)
        if value is None:
            return cls()
        if not isinstance(value, str):
            raise UUIDError(f"cannot unmarshal JSON {type(value).__name__} into UUID")
        return cls.unmarshal_text(value.encode("utf-8"))


def _as_bytes(value: bytes | bytearray | str) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8")
    return bytes(value)


def _unhex(chunk: bytes) -> bytes:
    if not _HEX_DIGITS.issuperset(chunk):
        raise InvalidFormatError()
    return bytes.fromhex(chunk.decode("ascii"))


def _unhex_hyphenated(text: bytes) -> bytes:
    if any(text[pos] != 0x2D for pos in _DASH_POSITIONS):
        raise InvalidFormatError()
    return b"".join(_unhex(text[start:end]) for start, end in _HEX_GROUPS)


def _check_urn_prefix(text: bytes) -> None:
    prefix = text[:9]
    if prefix.lower() != _URN_PREFIX:
        raise URNPrefixError(prefix.decode("utf-8", "backslashreplace"))


def parse_bytes(b: bytes) -> UUID:
    """Parse a UUID from bytes.

    Accepts the hyphenated form, the ``urn:uuid:`` form, 32 hex digits and a
    38 character form in which only the middle 36 characters are examined.
    """
    text = _as_bytes(b)
    length = len(text)
    if length == 32:
        return UUID(_unhex(text))
    if length == 36 + 9:
        _check_urn_prefix(text)
        text = text[9:]
    elif length == 36 + 2:
        text = text[1:]
    elif length != 36:
        raise InvalidLengthError(length)
    return UUID(_unhex_hyphenated(text))


def parse(s: str) -> UUID:
    """Parse a UUID from a string; see :func:`parse_bytes` for the forms."""
    return parse_bytes(_as_bytes(s))


def must_parse(s: str) -> UUID:
    """Parse s, raising UUIDError with the offending text in the message."""
    try:
        return parse(s)
    except UUIDError as err:
        raise UUIDError(f"uuid: Parse({s}): {err}") from err


def from_bytes(b: bytes) -> UUID:
    """Build a UUID from exactly 16 raw bytes."""
    return UUID.unmarshal_binary(b)


def validate(s: str) -> None:
    """Raise a UUIDError unless s is a well formed UUID.

    Unlike :func:`parse`, a 38 character string must be enclosed in braces.
    """
    text = _as_bytes(s)
    length = len(text)
    if length == 32:
        _unhex(text)
        return
    if length == 36 + 9:
        _check_urn_prefix(text)
        text = text[9:]
    elif length == 36 + 2:
        if text[:1] != b"{" or text[-1:] != b"}":
            raise InvalidBracketedFormatError()
        text = text[1:-1]
    elif length != 36:
        raise InvalidLengthError(length)
    _unhex_hyphenated(text)


def compare(a: UUID, b: UUID) -> int:
    """Return -1, 0 or 1 comparing the bytes of a and b."""
    return (a.data > b.data) - (a.data < b.data)


def strings(uuids: Iterable[UUID]) -> list[str]:
    """Return the string form of each UUID."""
    return [str(u) for u in uuids]


def is_invalid_length_error(err: BaseException | None) -> bool:
    """Tell whether err reports an invalid UUID length."""
    return isinstance(err, InvalidLengthError)


NIL = UUID()
MAX = UUID(b"\xff" * 16)

NAMESPACE_DNS = must_parse("6ba7b810-9dad-11d1-80b4-00c04fd430c8")
NAMESPACE_URL = must_parse("6ba7b811-9dad-11d1-80b4-00c04fd430c8")
NAMESPACE_OID = must_parse("6ba7b812-9dad-11d1-80b4-00c04fd430c8")
NAMESPACE_X500 = must_parse("6ba7b814-9dad-11d1-80b4-00c04fd430c8")