"""Platform abstraction layer."""

from .files import atomic_write_text, read_text_if_exists

__all__ = ["atomic_write_text", "read_text_if_exists"]
