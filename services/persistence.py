"""Manifest file I/O.

The manifest is the build-time table used by the manifest source mode:
``{"categories": [{"name", "display_name", "artworks": [...]}, ...]}``.
Order in the file is the navigation order.
"""
import json
import logging
import os
import tempfile
import shutil
from dataclasses import asdict
from typing import List, Dict, Any, Optional

from domain.models import Category, category_from_dict
from utils.paths import resolve_data_file, default_data_path

logger = logging.getLogger(__name__)


class ManifestError(ValueError):
    """Raised when a manifest file exists but does not have the expected shape."""


def manifest_path(filename: str) -> str:
    return resolve_data_file(filename) or default_data_path(filename)


def load_manifest(filename: str) -> List[Category]:
    file_path = manifest_path(filename)
    if not os.path.exists(file_path):
        logger.warning(f"Manifest {file_path} not found")
        return []
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        raise ManifestError(f"cannot read manifest {file_path}: {e}") from e
    return categories_from_manifest(data)


def categories_from_manifest(data: Dict[str, Any]) -> List[Category]:
    rows = data.get('categories') if isinstance(data, dict) else None
    if not isinstance(rows, list):
        raise ManifestError("manifest must contain a 'categories' list")
    categories: List[Category] = []
    seen = set()
    for row in rows:
        if not isinstance(row, dict) or not isinstance(row.get('name'), str):
            raise ManifestError(f"bad manifest entry {row!r}: expected an object with a string 'name'")
        artworks = row.get('artworks', [])
        if not isinstance(artworks, list) or not all(isinstance(a, dict) for a in artworks):
            raise ManifestError(f"bad manifest entry {row['name']!r}: 'artworks' must be a list of objects")
        try:
            category = category_from_dict(row)
        except (KeyError, TypeError) as e:
            raise ManifestError(f"bad manifest entry {row!r}: {e}") from e
        if category.name in seen:
            logger.warning(f"Duplicate category '{category.name}' in manifest, keeping first")
            continue
        seen.add(category.name)
        categories.append(category)
    return categories


def _strip_empty(d: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in d.items() if v is not None}


def manifest_to_dict(categories: List[Category]) -> Dict[str, Any]:
    return {
        'categories': [
            {
                'name': c.name,
                'display_name': c.display_name,
                'artworks': [_strip_empty(asdict(a)) for a in c.artworks],
            }
            for c in categories
        ]
    }


def atomic_write(file_path: str, data: Dict[str, Any]):
    os.makedirs(os.path.dirname(os.path.abspath(file_path)), exist_ok=True)
    tmp_fd, tmp_path = tempfile.mkstemp(prefix='tmp_', suffix='.json')
    with os.fdopen(tmp_fd, 'w', encoding='utf-8') as f:
        json.dump(data, f, ensure_ascii=False, indent=2)
    shutil.move(tmp_path, file_path)


def write_manifest(categories: List[Category], file_path: Optional[str] = None) -> str:
    target = file_path or default_data_path('manifest.json')
    atomic_write(target, manifest_to_dict(categories))
    return target
