import hashlib
import io
import os
import threading
import time
from datetime import datetime, timedelta, timezone

import pytest

from uidkit.clock import set_clock_sequence, set_time_source
from uidkit.core import NAMESPACE_DNS, Domain, Variant, compare, parse
from uidkit.entropy import disable_rand_pool, enable_rand_pool, set_rand
from uidkit.generate import (
    new,
    new_dce_group,
    new_dce_person,
    new_dce_security,
    new_hash,
    new_md5,
    new_random,
    new_random_from_reader,
    new_sha1,
    new_string,
    new_uuid,
    new_v6,
    new_v6_with_time,
    new_v7,
    new_v7_from_reader,
)


@pytest.fixture(autouse=True)
def _reset_state():
    set_rand(None)
    disable_rand_pool()
    set_time_source(None)
    yield
    set_rand(None)
    disable_rand_pool()
    set_time_source(None)


class _BadRand:
    def read(self, size):
        return bytes(i & 0xFF for i in range(size))


class _FakeRand:
    def read(self, size):
        return b"\x88" * size


def test_random_uuid():
    seen = set()
    for _ in range(31):
        uuid = new()
        s = str(uuid)
        assert s not in seen
        seen.add(s)
        assert uuid.version() == 4
        assert uuid.variant() == Variant.RFC4122


def test_random_uuid_pooled():
    enable_rand_pool()
    seen = set()
    for _ in range(127):
        uuid = new()
        s = str(uuid)
        assert s not in seen
        seen.add(s)
        assert uuid.version() == 4
        assert uuid.variant() == Variant.RFC4122


def test_new_round_trips_through_parse():
    seen = set()
    for _ in range(31):
        u = new()
        assert u not in seen
        seen.add(u)
        parsed = parse(str(u))
        assert parsed == u
        assert parsed.version() == 4
        assert parsed.variant() == Variant.RFC4122


def test_new_string_parses_as_version4():
    s = new_string()
    assert len(s) == 36
    assert parse(s).version() == 4


def test_clock_seq():
    state = {"now": time.time_ns()}

    def advancing():
        state["now"] += 1_000_000_000
        return state["now"]

    set_time_source(advancing)

    set_clock_sequence(-1)
    uuid1 = new_uuid()
    uuid2 = new_uuid()
    assert uuid1.clock_sequence() == uuid2.clock_sequence()

    set_clock_sequence(-1)
    uuid2 = new_uuid()
    if uuid1.clock_sequence() == uuid2.clock_sequence():
        set_clock_sequence(-1)
        uuid2 = new_uuid()
    assert uuid1.clock_sequence() != uuid2.clock_sequence()

    set_clock_sequence(0x1234)
    uuid1 = new_uuid()
    assert uuid1.clock_sequence() == 0x1234


def _check_time_ordered(uuid1, uuid2, version):
    assert uuid1 != uuid2
    assert uuid1.version() == version
    assert uuid2.version() == version
    assert uuid1.node_id() == uuid2.node_id()
    t1, t2 = uuid1.time(), uuid2.time()
    q1, q2 = uuid1.clock_sequence(), uuid2.clock_sequence()
    assert not (t1 == t2 and q1 == q2), "time stopped"
    assert not (t1 > t2 and q1 == q2), "time reversed"
    assert not (t1 < t2 and q1 != q2), "clock sequence changed unexpectedly"


def test_version1():
    _check_time_ordered(new_uuid(), new_uuid(), 1)


def test_version6():
    _check_time_ordered(new_v6(), new_v6(), 6)


def test_md5():
    assert str(new_md5(NAMESPACE_DNS, b"python.org")) == "6fa459ea-ee8a-3ca4-894e-db77e160355e"


def test_sha1():
    assert str(new_sha1(NAMESPACE_DNS, b"python.org")) == "886313e1-3b8a-5372-9b90-0c9aee199e5d"


def test_new_hash_sets_version_and_variant():
    u = new_hash(hashlib.sha256, NAMESPACE_DNS, "python.org", 0x18)
    assert u.version() == 8
    assert u.variant() == Variant.RFC4122
    assert new_hash(hashlib.sha256, NAMESPACE_DNS, b"python.org", 8) == u


def test_new_hash_str_and_bytes_agree():
    assert new_md5(NAMESPACE_DNS, "python.org") == new_md5(NAMESPACE_DNS, b"python.org")


def _check_dce(uuid, domain, ident):
    assert uuid.version() == 2
    assert uuid.domain() == domain
    assert uuid.id() == ident


def test_dce():
    _check_dce(new_dce_security(Domain(42), 12345678), 42, 12345678)
    _check_dce(new_dce_person(), Domain.PERSON, os.getuid())
    _check_dce(new_dce_group(), Domain.GROUP, os.getgid())


def test_bad_rand():
    set_rand(_BadRand())
    uuid1 = new()
    uuid2 = new()
    assert str(uuid1) == "00010203-0405-4607-8809-0a0b0c0d0e0f"
    assert uuid1 == uuid2
    set_rand(None)
    uuid3 = new()
    uuid4 = new()
    assert uuid3.version() == 4
    assert uuid3 != uuid4


def test_set_rand():
    my_string = (
        b"805-9dd6-1a877cb526c678e71d38-7122-44c0-9b7c-04e7001cc78783ac3e82-47a3-"
        b"4cc3-9951-13f3339d88088f5d685a-11f7-4078-ada9-de44ad2daeb7"
    )
    set_rand(io.BytesIO(my_string))
    uuid1 = new()
    uuid2 = new()
    set_rand(io.BytesIO(my_string))
    uuid3 = new()
    uuid4 = new()
    assert uuid1 == uuid3
    assert uuid2 == uuid4


def test_random_from_reader():
    my_string = b"8059ddhdle77cb52"
    r = io.BytesIO(my_string)
    r2 = io.BytesIO(my_string)
    uuid1 = new_random_from_reader(r)
    with pytest.raises(EOFError):
        new_random_from_reader(r)
    uuid3 = new_random_from_reader(r2)
    assert uuid1 == uuid3
    assert uuid1.version() == 4


def test_rand_pool():
    my_string = b"8059ddhdle77cb52"
    enable_rand_pool()
    set_rand(io.BytesIO(my_string))
    with pytest.raises(EOFError):
        new_random()
    disable_rand_pool()
    set_rand(io.BytesIO(my_string))
    assert new_random().version() == 4


def test_version7():
    seen = set()
    for _ in range(127):
        uuid = new_v7()
        s = str(uuid)
        assert s not in seen
        seen.add(s)
        assert uuid.version() == 7
        assert uuid.variant() == Variant.RFC4122


def test_version7_pooled():
    enable_rand_pool()
    seen = set()
    for _ in range(127):
        uuid = new_v7()
        s = str(uuid)
        assert s not in seen
        seen.add(s)
        assert uuid.version() == 7
        assert uuid.variant() == Variant.RFC4122


def test_version7_from_reader():
    r = io.BytesIO(b"8059ddhdle77cb52")
    assert new_v7_from_reader(r).version() == 7
    with pytest.raises(EOFError):
        new_v7_from_reader(r)


def test_version7_monotonicity():
    u1 = str(new_v7())
    for _ in range(10000):
        u2 = str(new_v7())
        assert u2 > u1
        u1 = u2


def test_version7_monotonicity_strict():
    fixed = int(datetime(2008, 8, 8, 8, 8, 8, tzinfo=timezone.utc).timestamp()) * 1_000_000_000 + 8
    set_time_source(lambda: fixed)
    set_rand(_FakeRand())
    u1 = new_v7()
    for _ in range(5000):  # more than 3906 values per millisecond
        u2 = new_v7()
        assert compare(u1, u2) < 0
        u1 = u2


def test_version7_encodes_time():
    moment = datetime(2100, 1, 1, tzinfo=timezone.utc)
    set_time_source(lambda: moment)
    u = new_v7()
    assert u.version() == 7
    assert u.time().unix_time()[0] == int(moment.timestamp())


_NOW = datetime.now(timezone.utc).replace(microsecond=0)


@pytest.mark.parametrize(
    "custom_time",
    [
        _NOW,
        _NOW - timedelta(days=365),
        _NOW + timedelta(days=365),
        datetime.fromisoformat("2021-09-01T12:00:00+04:00"),
        datetime.fromisoformat("2021-09-01T12:00:00-12:00"),
        datetime.fromisoformat("2124-09-23T12:43:30+09:00"),
    ],
)
def test_new_v6_with_time(custom_time):
    u = new_v6_with_time(custom_time)
    assert u.version() == 6
    seconds, _ = u.time().unix_time()
    assert seconds == int(custom_time.timestamp())


def test_new_v6_from_time_generates_unique_uuids():
    now = time.time_ns()
    runs = 26000  # more than 16384 clock sequences for one timestamp
    ids = set()
    for _ in range(runs):
        now += 1
        u = new_v6_with_time(now)
        assert u.version() == 6
        ids.add(str(u))
    assert len(ids) == runs


def test_version1_concurrent_uniqueness():
    batches = []
    lock = threading.Lock()

    def worker():
        batch = [new_uuid() for _ in range(500)]
        with lock:
            batches.append(batch)

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    generated = [u for batch in batches for u in batch]
    assert len(generated) == 2000
    for u in generated:
        assert u.version() == 1
    distinct = {str(u) for u in generated}
    assert len(distinct) == 2000

    after = new_uuid()
    assert after.version() == 1
    assert after.variant() == Variant.RFC4122
    assert str(after) not in distinct