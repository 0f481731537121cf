"""
Utils Package

Serialization helpers for portfolio documents.
"""

from .serialization import (
    DocumentLoadError,
    serialize_document,
    deserialize_document,
    load_document,
    save_document,
)

__all__ = [
    "DocumentLoadError",
    "serialize_document",
    "deserialize_document",
    "load_document",
    "save_document",
]
