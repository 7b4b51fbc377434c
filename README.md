# uidkit

Generate, parse and inspect UUIDs as described in RFC 9562 and DCE 1.1.

## Installation

```
pip install uidkit
```

## The UUID type

`uidkit.core.UUID` is a frozen dataclass holding exactly 16 bytes. It is
hashable and orders by its bytes. `UUID()` is the nil UUID; `core.NIL` and
`core.MAX` (all bits set) are provided, as are the namespaces
`NAMESPACE_DNS`, `NAMESPACE_URL`, `NAMESPACE_OID` and `NAMESPACE_X500`.

```python
from uidkit.core import parse

u = parse("f47ac10b-58cc-4372-8567-0e02b2c3d479")
str(u)           # 'f47ac10b-58cc-4372-8567-0e02b2c3d479'
u.urn()          # 'urn:uuid:f47ac10b-58cc-4372-8567-0e02b2c3d479'
u.version()      # Version(4); str() gives 'VERSION_4'
u.variant()      # Variant.RFC4122
bytes(u)         # the 16 raw bytes
```

Further accessors: `node_id()`, `time()` (a `Time`, whose `unix_time()`
returns `(seconds, nanoseconds)` since 1 Jan 1970), `clock_sequence()`, and
for DCE Security UUIDs `domain()` and `id()`.

Serialisation helpers: `marshal_text` / `UUID.unmarshal_text`,
`marshal_binary` / `UUID.unmarshal_binary`, and `marshal_json` /
`UUID.unmarshal_json` (JSON `null` decodes to the nil UUID).

## Parsing and validating

`parse` and `parse_bytes` accept the standard hyphenated form, the
`urn:uuid:` form (prefix matched case-insensitively), 32 hex digits without
hyphens, and a 38-character form of which only the middle 36 characters are
examined. Failures raise a subclass of `UUIDError` (itself a `ValueError`):
`InvalidLengthError`, `URNPrefixError` or `InvalidFormatError`.

`validate` returns `None` for a well-formed string and raises otherwise; it
also requires the 38-character form to be enclosed in braces, raising
`InvalidBracketedFormatError` if not.

`must_parse` re-raises parse failures as a `UUIDError` naming the input,
`from_bytes` builds a UUID from exactly 16 bytes, `compare` returns -1, 0
or 1, `strings` maps UUIDs to their string forms, and
`is_invalid_length_error` tells whether an exception is an
`InvalidLengthError`.

## Generating

```python
from uidkit.core import NAMESPACE_DNS
from uidkit.generate import new, new_uuid, new_v6, new_v7, new_sha1

new()            # random, version 4
new_uuid()       # time and node based, version 1
new_v6()         # reordered time based, version 6
new_v7()         # Unix-millisecond time ordered, version 7

str(new_sha1(NAMESPACE_DNS, b"python.org"))
# '886313e1-3b8a-5372-9b90-0c9aee199e5d'
```

Also available: `new_string`, `new_random`, `new_random_from_reader`,
`new_v6_with_time` (a `datetime` or Unix nanoseconds), `new_v7_from_reader`,
`new_md5`, `new_hash` (any hashlib-style factory), and the DCE Security
(version 2) functions `new_dce_security`, `new_dce_person` and
`new_dce_group`. The last two use `os.getuid()` and `os.getgid()` and so
work only on POSIX systems. Reader-based functions raise `EOFError` when
the reader has fewer than 16 bytes left.

Version 7 UUIDs from one process are strictly increasing, even when many
are made within the same millisecond.

## Randomness, clock and node

- `uidkit.entropy.set_rand(reader)` swaps the source of random bytes for any
  object with a `read(size)` method; `set_rand(None)` restores the system
  source. `enable_rand_pool()` and `disable_rand_pool()` turn batched reads
  on and off for version 4 and 7 generation; `rand_pool_enabled()` reports
  the setting.
- `uidkit.clock.set_clock_sequence(seq)` sets the 14-bit clock sequence
  (`-1` picks a random one) and `clock_sequence()` reports it.
  `set_time_source(now)` replaces the clock with a callable returning a
  `datetime` or Unix nanoseconds; `None` restores the system clock.
- `uidkit.node.set_node_id(id)` and `set_node_interface(name)` choose the
  6-byte node used by versions 1, 2 and 6; `node_id()` returns it, and
  `node_interface()` names its source (`"user"`, `"random"` or a network
  interface name found through psutil).

## Databases and JSON

`uidkit.sql.scan` turns a database value into a UUID: `None` and empty
values give the nil UUID, strings are parsed, 16-byte values are taken as
raw bytes and other byte values are parsed as text; any other type raises
`TypeError`. `value` returns the string form a driver would store.

`NullUUID` holds a UUID that may be SQL `NULL` (`valid` is `False`). It has
`scan`, `value` and text, binary and JSON marshalling, with `null` (or empty
bytes for binary) standing for the missing value.

## What it does not do

uidkit is a library only: it installs no command-line tool.

## Running the tests

```
pip install -e ".[test]"
pytest
```