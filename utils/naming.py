import re
from typing import Iterable

from domain.constants import DISPLAY_NAME_MAP

_WORD_SPLIT = re.compile(r'[-_]+')
_SLUG_SPLIT = re.compile(r'[-_\s]+')


def _title_words(words: Iterable[str]) -> str:
    return ' '.join(w[:1].upper() + w[1:].lower() for w in words if w)


def split_extension(filename: str):
    """('living-room', 'jpg') for 'living-room.JPG'; extension is '' when absent."""
    stem, dot, ext = filename.rpartition('.')
    if not dot or not stem:
        return filename, ''
    return stem, ext.lower()


def title_from_filename(filename: str) -> str:
    """'abstract-painting-2023.png' -> 'Abstract Painting 2023'."""
    stem, _ = split_extension(filename)
    return _title_words(_WORD_SPLIT.split(stem))


def display_name_for(category_name: str) -> str:
    override = DISPLAY_NAME_MAP.get(category_name.lower())
    if override:
        return override
    return _title_words(_SLUG_SPLIT.split(category_name))
