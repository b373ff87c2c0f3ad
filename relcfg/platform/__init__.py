"""Platform helpers (filesystem)."""

from .files import atomic_write_text, read_text

__all__ = ["atomic_write_text", "read_text"]
