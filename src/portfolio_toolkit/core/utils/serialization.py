"""
Serialization Utilities

Provides to/from JSON utilities for portfolio documents.

- `serialize_document` / `deserialize_document` wrap the model's
  `to_dict()` / `from_dict()` methods
- `load_document` / `save_document` handle files
- All failures surface as DocumentLoadError with the offending path
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from ..models.document import PortfolioDocument

logger = logging.getLogger(__name__)


class DocumentLoadError(Exception):
    """Portfolio document could not be read or parsed."""
    pass


def serialize_document(document: PortfolioDocument) -> dict[str, Any]:
    """
    Serialize a PortfolioDocument to a dictionary.

    Args:
        document: Document to serialize

    Returns:
        Dictionary suitable for JSON serialization
    """
    return document.to_dict()


def deserialize_document(data: Any) -> PortfolioDocument:
    """
    Deserialize a PortfolioDocument from a dictionary.

    Args:
        data: Dictionary from JSON

    Returns:
        PortfolioDocument instance

    Raises:
        DocumentLoadError: If data is not an object or lacks a student name
    """
    if not isinstance(data, dict):
        raise DocumentLoadError(
            f"Expected a JSON object, got {type(data).__name__}"
        )
    try:
        return PortfolioDocument.from_dict(data)
    except KeyError as e:
        raise DocumentLoadError(f"Missing required field: {e.args[0]}") from e


def load_document(path: Path) -> PortfolioDocument:
    """
    Load a portfolio document from a JSON file.

    Args:
        path: Path to the JSON file

    Returns:
        PortfolioDocument instance

    Raises:
        DocumentLoadError: If the file cannot be read or parsed
    """
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as e:
        raise DocumentLoadError(f"Cannot read {path}: {e}") from e
    except UnicodeDecodeError as e:
        raise DocumentLoadError(f"Cannot decode {path} as UTF-8: {e}") from e
    except json.JSONDecodeError as e:
        raise DocumentLoadError(f"Invalid JSON in {path}: {e}") from e

    document = deserialize_document(data)
    logger.debug(
        f"Loaded document for {document.student_name!r} "
        f"with {len(document.images)} images from {path}"
    )
    return document


def save_document(document: PortfolioDocument, path: Path) -> None:
    """Write a document to a JSON file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(serialize_document(document), indent=2, ensure_ascii=False),
        encoding="utf-8",
    )
