"""I/O helpers for reading and replacing payload files."""

from .atomic import atomic_write_bytes, coerce_payload, read_file_bytes

__all__ = ["atomic_write_bytes", "coerce_payload", "read_file_bytes"]
