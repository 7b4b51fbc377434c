"""UUID generation: time based (1, 6, 7), DCE Security (2), name based (3, 5) and random (4)."""

from __future__ import annotations

import hashlib
import os
from typing import Any, Callable, Optional, Union

from .clock import Moment, get_time, get_v7_time
from .core import UUID, Domain, Time
from .entropy import Reader, pooled_bits, rand_pool_enabled, random_bits, read_full
from .node import node_id


def _u16(value: int) -> bytes:
    return (value & 0xFFFF).to_bytes(2, "big")


def _u32(value: int) -> bytes:
    return (value & 0xFFFFFFFF).to_bytes(4, "big")


def _random_version4(raw: bytes) -> UUID:
    data = bytearray(raw)
    data[6] = (data[6] & 0x0F) | 0x40
    data[8] = (data[8] & 0x3F) | 0x80
    return UUID(bytes(data))


def _generate_v1(now: Time, seq: int) -> UUID:
    time_low = now & 0xFFFFFFFF
    time_mid = (now >> 32) & 0xFFFF
    time_hi = ((now >> 48) & 0x0FFF) | 0x1000
    head = _u32(time_low) + _u16(time_mid) + _u16(time_hi) + _u16(seq)
    return UUID(head + node_id())


def _generate_v6(now: Time, seq: int) -> UUID:
    time_high = (now >> 28) & 0xFFFFFFFF
    time_mid = (now >> 12) & 0xFFFF
    time_low = (now & 0x0FFF) | 0x6000
    head = _u32(time_high) + _u16(time_mid) + _u16(time_low) + _u16(seq)
    return UUID(head + node_id())


def _make_v7(uuid: UUID) -> UUID:
    milli, seq = get_v7_time()
    data = bytearray(uuid.data)
    data[0:6] = (milli & 0xFFFFFFFFFFFF).to_bytes(6, "big")
    data[6] = 0x70 | ((seq >> 8) & 0x0F)
    data[7] = seq & 0xFF
    return UUID(bytes(data))


def new_uuid() -> UUID:
    """Return a Version 1 UUID from the current time, clock sequence and node ID."""
    now, seq = get_time()
    return _generate_v1(now, seq)


def new_random() -> UUID:
    """Return a random (Version 4) UUID, using the pool if it is enabled."""
    if rand_pool_enabled():
        return _random_version4(pooled_bits(16))
    return _random_version4(random_bits(16))


def new_random_from_reader(reader: Reader) -> UUID:
    """Return a Version 4 UUID built from 16 bytes read from reader.

    Raises EOFError if the reader has fewer than 16 bytes left.
    """
    return _random_version4(read_full(reader, 16))


def new() -> UUID:
    """Return a new random (Version 4) UUID."""
    return new_random()


def new_string() -> str:
    """Return a new random (Version 4) UUID in its string form."""
    return str(new_random())


def new_v6() -> UUID:
    """Return a Version 6 UUID from the current time, clock sequence and node ID."""
    now, seq = get_time()
    return _generate_v6(now, seq)


def new_v6_with_time(custom_time: Optional[Moment]) -> UUID:
    """Return a Version 6 UUID for custom_time (a datetime or Unix nanoseconds).

    None uses the current time.
    """
    now, seq = get_time(custom_time)
    return _generate_v6(now, seq)


def new_v7() -> UUID:
    """Return a Version 7 UUID from the current Unix time in milliseconds."""
    return _make_v7(new_random())


def new_v7_from_reader(reader: Reader) -> UUID:
    """Return a Version 7 UUID whose random bits are read from reader."""
    return _make_v7(new_random_from_reader(reader))


def new_dce_security(domain: Union[Domain, int], id: int) -> UUID:
    """Return a DCE Security (Version 2) UUID for the domain and 32 bit id."""
    data = bytearray(new_uuid().data)
    data[6] = (data[6] & 0x0F) | 0x20
    data[9] = int(domain) & 0xFF
    data[0:4] = _u32(id)
    return UUID(bytes(data))


def new_dce_person() -> UUID:
    """Return a Version 2 UUID in the person domain with the current user id."""
    return new_dce_security(Domain.PERSON, os.getuid())


def new_dce_group() -> UUID:
    """Return a Version 2 UUID in the group domain with the current group id."""
    return new_dce_security(Domain.GROUP, os.getgid())


def new_hash(
    hash_factory: Callable[[], Any],
    space: UUID,
    data: Union[bytes, str],
    version: int,
) -> UUID:
    """Return a UUID from the hash of space followed by data.

    The first 16 bytes of the digest are used; the version is the low 4 bits
    of version and the variant is set to RFC 9562.
    """
    raw = data.encode("utf-8") if isinstance(data, str) else bytes(data)
    digest = hash_factory()
    digest.update(space.data)
    digest.update(raw)
    out = bytearray(digest.digest()[:16].ljust(16, b"\x00"))
    out[6] = (out[6] & 0x0F) | ((version & 0xF) << 4)
    out[8] = (out[8] & 0x3F) | 0x80
    return UUID(bytes(out))


def new_md5(space: UUID, data: Union[bytes, str]) -> UUID:
    """Return a name based MD5 (Version 3) UUID."""
    return new_hash(hashlib.md5, space, data, 3)


def new_sha1(space: UUID, data: Union[bytes, str]) -> UUID:
    """Return a name based SHA-1 (Version 5) UUID."""
    return new_hash(hashlib.sha1, space, data, 5)