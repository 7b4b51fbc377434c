"""Node ID (hardware address) used by Version 1 and 6 UUIDs."""

from __future__ import annotations

import threading
from typing import Optional

import psutil

from .entropy import random_bits

_NODE_LEN = 6
_ZERO_NODE = bytes(_NODE_LEN)


class _NodeState:
    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.ifname = ""
        self.node = _ZERO_NODE
        self.interfaces: Optional[list[tuple[str, bytes]]] = None


_state = _NodeState()


def _parse_hardware_address(address: str) -> Optional[bytes]:
    digits = address.replace(":", "").replace("-", "").replace(".", "")
    try:
        return bytes.fromhex(digits)
    except ValueError:
        return None


def _interfaces() -> list[tuple[str, bytes]]:
    """Return (name, hardware address) pairs, cached after the first success."""
    if _state.interfaces is None:
        try:
            addresses = psutil.net_if_addrs()
        except (OSError, psutil.Error):
            return []
        found = []
        for name, entries in addresses.items():
            for entry in entries:
                if entry.family != psutil.AF_LINK or not entry.address:
                    continue
                hardware = _parse_hardware_address(entry.address)
                if hardware and len(hardware) >= _NODE_LEN and any(hardware):
                    found.append((name, hardware))
                    break
        _state.interfaces = found
    return _state.interfaces


def _hardware_interface(name: str) -> Optional[tuple[str, bytes]]:
    for iface, hardware in _interfaces():
        if not name or name == iface:
            return iface, hardware
    return None


def _set_node_interface(name: str) -> bool:
    found = _hardware_interface(name)
    if found is not None:
        _state.ifname, hardware = found
        _state.node = hardware[:_NODE_LEN]
        return True
    if not name:
        _state.ifname = "random"
        _state.node = random_bits(_NODE_LEN)
        return True
    return False


def node_interface() -> str:
    """Return the interface the node ID came from, or "user" if set directly."""
    with _state.lock:
        return _state.ifname


def set_node_interface(name: str = "") -> bool:
    """Take the node ID from the named interface.

    An empty name picks the first usable interface, or random bits if
    there is none, and never fails. False means the named interface was
    not found.
    """
    with _state.lock:
        return _set_node_interface(name)


def node_id() -> bytes:
    """Return the current 6 byte node ID, choosing one if not yet set."""
    with _state.lock:
        if _state.node == _ZERO_NODE:
            _set_node_interface("")
        return _state.node


def set_node_id(id: bytes) -> bool:
    """Use the first 6 bytes of id as the node ID; False if id is shorter."""
    raw = bytes(id)
    if len(raw) < _NODE_LEN:
        return False
    with _state.lock:
        _state.node = raw[:_NODE_LEN]
        _state.ifname = "user"
    return True