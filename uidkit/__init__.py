"""Generate, parse and inspect UUIDs, with clock, node, SQL and JSON helpers."""

__version__ = "0.1.0"

__all__ = ["core", "entropy", "clock", "node", "sql", "generate"]