"""Source of random bytes, with an optional pool that batches reads."""

from __future__ import annotations

import os
import threading
from typing import Optional, Protocol


class Reader(Protocol):
    """Anything with a ``read(size)`` method returning bytes."""

    def read(self, size: int, /) -> bytes:
        ...


class _SystemRandom:
    """Reader backed by the operating system's random source."""

    def read(self, size: int) -> bytes:
        return os.urandom(size)


_POOL_SIZE = 16 * 16


class _EntropyState:
    def __init__(self) -> None:
        self.reader: Reader = _SystemRandom()
        self.pool_enabled = False
        self.pool_lock = threading.Lock()
        self.pool = bytes(_POOL_SIZE)
        self.pool_pos = _POOL_SIZE


_state = _EntropyState()


def set_rand(reader: Optional[Reader]) -> None:
    """Use reader as the random source; None restores the system source."""
    _state.reader = _SystemRandom() if reader is None else reader


def enable_rand_pool() -> None:
    """Serve random UUIDs from a pool filled in batches from the source."""
    _state.pool_enabled = True


def disable_rand_pool() -> None:
    """Stop using the pool and discard whatever is left in it."""
    _state.pool_enabled = False
    with _state.pool_lock:
        _state.pool_pos = _POOL_SIZE


def rand_pool_enabled() -> bool:
    """Tell whether the randomness pool is in use."""
    return _state.pool_enabled


def read_full(reader: Reader, n: int) -> bytes:
    """Read exactly n bytes from reader.

    Raises EOFError if the reader runs out before n bytes are read.
    """
    chunks = []
    remaining = n
    while remaining > 0:
        chunk = reader.read(remaining)
        if not chunk:
            break
        chunks.append(bytes(chunk))
        remaining -= len(chunk)
    data = b"".join(chunks)
    if len(data) < n:
        raise EOFError("unexpected EOF" if data else "EOF")
    return data[:n]


def random_bits(n: int) -> bytes:
    """Return n bytes from the current random source."""
    return read_full(_state.reader, n)


def pooled_bits(n: int) -> bytes:
    """Return n bytes taken from the pool, refilling it when it runs short."""
    if n > _POOL_SIZE:
        raise ValueError(f"cannot take {n} bytes from a pool of {_POOL_SIZE}")
    with _state.pool_lock:
        if _state.pool_pos + n > _POOL_SIZE:
            _state.pool = read_full(_state.reader, _POOL_SIZE)
            _state.pool_pos = 0
        start = _state.pool_pos
        _state.pool_pos += n
        return _state.pool[start:start + n]