"""Binary snapshot of an aggregation tree for transfer to a viewer."""

from .codec import CONTENT_TYPE, FORMAT_VERSION, MAGIC, decode, encode

__all__ = ["encode", "decode", "MAGIC", "FORMAT_VERSION", "CONTENT_TYPE"]
