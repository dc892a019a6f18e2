"""JSON document I/O.

This module provides functions for loading input and collection documents
with Pydantic validation, and for writing collection documents with sorted
keys, either compact or pretty-printed.
"""

import json
import os
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from pkgcollection.models.collection import Collection
from pkgcollection.models.input import CollectionInput

_ModelT = TypeVar("_ModelT", bound=BaseModel)


class DocumentError(Exception):
    """Base exception for document-related errors."""


class DocumentNotFoundError(DocumentError):
    """Raised when a document file is not found."""


class DocumentParseError(DocumentError):
    """Raised when a document is not valid UTF-8 encoded JSON."""


class DocumentValidationError(DocumentError):
    """Raised when document content does not match the schema."""


def _load_json(path: Path) -> Any:
    if not path.exists():
        raise DocumentNotFoundError(f"Document not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise DocumentParseError(f"Invalid JSON in {path}: {e}") from e
    except UnicodeDecodeError as e:
        raise DocumentParseError(f"{path} is not UTF-8 encoded: {e}") from e
    except OSError as e:
        raise DocumentError(f"Failed to read {path}: {e}") from e


def _load_model(path: Path, model: type[_ModelT]) -> _ModelT:
    data = _load_json(path)
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise DocumentValidationError(f"Invalid content in {path}: {e}") from e


def load_collection_input(path: Path) -> CollectionInput:
    """Load and validate a generator input document.

    Args:
        path: Path to the input JSON file.

    Returns:
        Validated CollectionInput.

    Raises:
        DocumentNotFoundError: If the file doesn't exist.
        DocumentParseError: If the file is not valid JSON.
        DocumentValidationError: If the content doesn't match the schema.
    """
    return _load_model(path, CollectionInput)


def load_collection(path: Path) -> Collection:
    """Load and validate a collection document.

    Args:
        path: Path to the collection JSON file.

    Returns:
        Validated Collection.

    Raises:
        DocumentNotFoundError: If the file doesn't exist.
        DocumentParseError: If the file is not valid JSON.
        DocumentValidationError: If the content doesn't match the schema.
    """
    return _load_model(path, Collection)


def document_to_json(document: BaseModel, pretty: bool = False) -> str:
    """Serialize a document model with sorted keys.

    Args:
        document: Collection or SignedCollection.
        pretty: Indent with two spaces instead of writing compact JSON.

    Returns:
        JSON text using the wire field names.
    """
    data = document.model_dump(mode="json", by_alias=True)
    if pretty:
        return json.dumps(data, sort_keys=True, indent=2, ensure_ascii=False)
    return json.dumps(data, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def save_document(document: BaseModel, path: Path, pretty: bool = False) -> Path:
    """Write a document model to a JSON file.

    The file is written atomically by first writing to a temporary file
    in the same directory and then using os.replace() for atomic rename.
    Missing parent directories are created.

    Args:
        document: Collection or SignedCollection.
        path: Destination file.
        pretty: Indent with two spaces instead of writing compact JSON.

    Returns:
        Path where the document was saved.

    Raises:
        DocumentError: If the file cannot be written.
    """
    text = document_to_json(document, pretty=pretty)

    tmp_path: Path | None = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            dir=path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            f.write(text)
        os.replace(str(tmp_path), str(path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise DocumentError(f"Failed to write {path}: {e}") from e

    return path
