"""Parse server-generated directory-listing documents.

A listing is any HTML document whose ``<a href>`` elements enumerate the
entries of a folder. Targets ending in ``/`` are subfolders; targets with an
eligible image extension are artworks. Everything else is ignored.
"""
from __future__ import annotations

from dataclasses import dataclass
from html.parser import HTMLParser
from typing import List
from urllib.parse import unquote

from domain.constants import IMAGE_EXTENSIONS, PARENT_LINKS
from utils.naming import split_extension


class ListingParseError(ValueError):
    """Raised when a listing response is not a text document."""


class _LinkCollector(HTMLParser):
    def __init__(self):
        super().__init__(convert_charrefs=True)
        self.hrefs: List[str] = []

    def handle_starttag(self, tag, attrs):
        if tag != 'a':
            return
        for key, value in attrs:
            if key == 'href' and value:
                self.hrefs.append(value.strip())
                break


@dataclass(frozen=True)
class ListingEntries:
    folders: List[str]
    files: List[str]


def extract_links(document: str) -> List[str]:
    """All link targets in document order."""
    if not isinstance(document, str):
        raise ListingParseError(f"listing must be text, got {type(document).__name__}")
    collector = _LinkCollector()
    collector.feed(document)
    collector.close()
    return collector.hrefs


def _clean_target(href: str) -> str:
    target = href.split('?', 1)[0].split('#', 1)[0]
    while target.startswith('./'):
        target = target[2:]
    return target


def is_image_filename(filename: str) -> bool:
    _, ext = split_extension(filename)
    return ext in IMAGE_EXTENSIONS


def parse_listing(document: str) -> ListingEntries:
    """Split a listing into subfolder names and eligible image filenames.

    Both lists keep document order and drop repeats.
    """
    folders: List[str] = []
    files: List[str] = []
    for href in extract_links(document):
        if href in PARENT_LINKS:
            continue
        target = _clean_target(href)
        if not target or target in PARENT_LINKS:
            continue
        if target.endswith('/'):
            # /portfolio/garments/ and ./garments/ both name "garments"
            name = unquote(target.rstrip('/').rsplit('/', 1)[-1])
            if name and name not in ('.', '..') and name not in folders:
                folders.append(name)
            continue
        filename = unquote(target.rsplit('/', 1)[-1])
        if is_image_filename(filename) and filename not in files:
            files.append(filename)
    return ListingEntries(folders=folders, files=files)
