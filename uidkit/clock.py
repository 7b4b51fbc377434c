"""Clock state for time based UUIDs: timestamps and the clock sequence."""

from __future__ import annotations

import threading
import time
from datetime import datetime, timezone
from typing import Callable, Optional, Union

from .core import GREGORIAN_OFFSET, Time
from .entropy import random_bits

Moment = Union[int, datetime]

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_NANOS_PER_MILLI = 1_000_000


def _to_nanos(moment: Moment) -> int:
    """Return nanoseconds since the Unix epoch for a datetime or an int."""
    if isinstance(moment, datetime):
        if moment.tzinfo is None:
            moment = moment.astimezone(timezone.utc)
        delta = moment - _EPOCH
        return (delta.days * 86400 + delta.seconds) * 1_000_000_000 + delta.microseconds * 1000
    return int(moment)


def _trunc_div(a: int, b: int) -> int:
    quotient = abs(a) // b
    return quotient if a >= 0 else -quotient


class _ClockState:
    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.now: Callable[[], Moment] = time.time_ns
        self.last_time = 0
        self.clock_seq = 0
        self.last_v7 = 0


_clock = _ClockState()


def set_time_source(now: Optional[Callable[[], Moment]]) -> None:
    """Read the current time from now(), which returns a datetime or Unix nanoseconds.

    None restores the system clock.
    """
    _clock.now = time.time_ns if now is None else now


def _set_clock_sequence(seq: int) -> None:
    if seq == -1:
        seq = int.from_bytes(random_bits(2), "big")
    old = _clock.clock_seq
    _clock.clock_seq = (seq & 0x3FFF) | 0x8000
    if old != _clock.clock_seq:
        _clock.last_time = 0


def get_time(custom_time: Optional[Moment] = None) -> tuple[Time, int]:
    """Return the time (100 ns since 15 Oct 1582) and the clock sequence.

    Uses custom_time when given, otherwise the current time. The clock
    sequence is bumped whenever the time does not move forward.
    """
    with _clock.lock:
        moment = _clock.now() if custom_time is None else custom_time
        nanos = _to_nanos(moment)
        if _clock.clock_seq == 0:
            _set_clock_sequence(-1)
        now = _trunc_div(nanos, 100) + GREGORIAN_OFFSET
        if now <= _clock.last_time:
            _clock.clock_seq = ((_clock.clock_seq + 1) & 0x3FFF) | 0x8000
        _clock.last_time = now
        return Time(now), _clock.clock_seq


def clock_sequence() -> int:
    """Return the 14 bit clock sequence, generating one if not yet set."""
    with _clock.lock:
        if _clock.clock_seq == 0:
            _set_clock_sequence(-1)
        return _clock.clock_seq & 0x3FFF


def set_clock_sequence(seq: int) -> None:
    """Set the clock sequence to the low 14 bits of seq; -1 picks a random one."""
    with _clock.lock:
        _set_clock_sequence(seq)


def get_v7_time() -> tuple[int, int]:
    """Return (milliseconds since the Unix epoch, 12 bit sub-millisecond sequence).

    ``(milli << 12) + seq`` is strictly greater than on any earlier call.
    """
    with _clock.lock:
        nanos = _to_nanos(_clock.now())
        milli = _trunc_div(nanos, _NANOS_PER_MILLI)
        seq = (nanos - milli * _NANOS_PER_MILLI) >> 8
        now = (milli << 12) + seq
        if now <= _clock.last_v7:
            now = _clock.last_v7 + 1
            milli = now >> 12
            seq = now & 0xFFF
        _clock.last_v7 = now
        return milli, seq