"""
Catalog file reading, writing and language selection
"""

import json
import logging
from pathlib import Path
from typing import Iterable, List, Union

from ..errors import ParseError, StorageError
from ..models import Extension

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def load_catalog(path: PathLike) -> List[Extension]:
    """
    Read a catalog file and build its Extension records.

    Args:
        path: Path to the JSON catalog

    Returns:
        Extensions in file order

    Raises:
        StorageError: If the file cannot be opened or read
        ParseError: If the content is not valid JSON or does not match the schema
    """
    catalog_path = Path(path)
    try:
        with open(catalog_path, 'rb') as f:
            raw = f.read()
    except OSError as e:
        raise StorageError(str(catalog_path), e.strerror or str(e)) from e

    try:
        data = json.loads(raw.decode('utf-8'))
    except UnicodeDecodeError as e:
        raise ParseError(f"catalog is not valid UTF-8: {e}") from e
    except json.JSONDecodeError as e:
        raise ParseError(f"invalid JSON at line {e.lineno} column {e.colno}: {e.msg}") from e

    if not isinstance(data, list):
        raise ParseError(f"catalog root must be an array, got {type(data).__name__}")

    extensions = [Extension.from_dict(item, f"[{i}]") for i, item in enumerate(data)]
    logger.info(f"Loaded {len(extensions)} extensions from {catalog_path}")
    return extensions


def dump_catalog(extensions: Iterable[Extension], path: PathLike) -> Path:
    """Write extensions back to disk in the wire format"""
    catalog_path = Path(path)
    payload = [extension.to_dict() for extension in extensions]
    try:
        with open(catalog_path, 'w', encoding='utf-8') as f:
            json.dump(payload, f, ensure_ascii=False)
    except OSError as e:
        raise StorageError(str(catalog_path), e.strerror or str(e)) from e
    return catalog_path


def filter_by_lang(extensions: Iterable[Extension], lang: str) -> List[Extension]:
    """Keep extensions whose lang equals ``lang`` exactly, in original order"""
    return [extension for extension in extensions if extension.lang == lang]
