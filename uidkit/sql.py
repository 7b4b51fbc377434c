"""Database helpers: scanning column values into UUIDs and a nullable UUID."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Union

from .core import NIL, UUID, UUIDError, parse_bytes

_JSON_NULL = b"null"


def _parse_scanned(text: bytes) -> UUID:
    try:
        return parse_bytes(text)
    except UUIDError as err:
        raise UUIDError(f"Scan: {err}") from err


def scan(src: Any) -> UUID:
    """Convert a database value into a UUID.

    None and empty values give the nil UUID. Strings are parsed; 16 byte
    values are taken as raw bytes and other byte values are parsed as text.
    """
    if src is None:
        return NIL
    if isinstance(src, str):
        if not src:
            return NIL
        return _parse_scanned(src.encode("utf-8"))
    if isinstance(src, (bytes, bytearray, memoryview)):
        raw = bytes(src)
        if not raw:
            return NIL
        if len(raw) != 16:
            return _parse_scanned(raw)
        return UUID(raw)
    raise TypeError(f"Scan: unable to scan type {type(src).__name__} into UUID")


def value(uuid: UUID) -> str:
    """Return the database representation of uuid, its string form."""
    return str(uuid)


_scan_uuid = scan
_uuid_value = value


def _as_bytes(data: Union[bytes, bytearray, str]) -> bytes:
    return data.encode("utf-8") if isinstance(data, str) else bytes(data)


@dataclass
class NullUUID:
    """A UUID that may be NULL; valid is False for NULL."""

    uuid: UUID = NIL
    valid: bool = False

    def scan(self, value: Any) -> None:
        """Load from a database value; None means NULL."""
        if value is None:
            self.uuid, self.valid = NIL, False
            return
        try:
            self.uuid = _scan_uuid(value)
        except (UUIDError, TypeError):
            self.valid = False
            raise
        self.valid = True

    def value(self) -> Optional[str]:
        """Return the database value: None for NULL, else the string form."""
        if not self.valid:
            return None
        return _uuid_value(self.uuid)

    def marshal_binary(self) -> bytes:
        """Return the 16 raw bytes, or empty bytes for NULL."""
        return self.uuid.marshal_binary() if self.valid else b""

    def unmarshal_binary(self, data: bytes) -> None:
        """Load from exactly 16 raw bytes."""
        self.uuid = UUID.unmarshal_binary(data)
        self.valid = True

    def marshal_text(self) -> bytes:
        """Return the text form, or ``null`` for NULL."""
        return self.uuid.marshal_text() if self.valid else _JSON_NULL

    def unmarshal_text(self, data: Union[bytes, str]) -> None:
        """Load from the text form of a UUID."""
        try:
            self.uuid = parse_bytes(_as_bytes(data))
        except UUIDError:
            self.valid = False
            raise
        self.valid = True

    def marshal_json(self) -> bytes:
        """Return a JSON string literal, or ``null`` for NULL."""
        return self.uuid.marshal_json() if self.valid else _JSON_NULL

    def unmarshal_json(self, data: Union[bytes, str]) -> None:
        """Load from JSON; a bare ``null`` gives NULL."""
        raw = _as_bytes(data)
        if raw == _JSON_NULL:
            self.uuid, self.valid = NIL, False
            return
        try:
            self.uuid = UUID.unmarshal_json(raw)
        except ValueError:
            self.valid = False
            raise
        self.valid = True