import pytest

from utils.listing_parser import ListingParseError, extract_links, is_image_filename, parse_listing

ROOT_LISTING = """<!DOCTYPE html>
<html><head><title>Index of /portfolio/</title></head>
<body><h1>Index of /portfolio/</h1>
<ul class="file-list">
  <li><a href="../">../</a></li>
  <li><a href="./fibers/">fibers</a></li>
  <li><a href="./garments/?C=M;O=A">garments</a></li>
  <li><a href="notes.txt">notes.txt</a></li>
  <li><a href="/portfolio/graphics/">graphics</a></li>
  <li><a href="./fibers/">fibers again</a></li>
  <li><a href="..">up</a></li>
  <li><a href="./fiber%20art/">fiber art</a></li>
</ul></body></html>
"""

CATEGORY_LISTING = """<html><body>
<a href="../">../</a>
<a href="./sketches/">sketches/</a>
<a href="./living-room.jpg">living-room.jpg</a>
<a href="abstract-painting-2023.PNG?v=3">abstract-painting-2023.PNG</a>
<a href="./scan.tiff">scan.tiff</a>
<a href="./loop.gif">loop.gif</a>
<a href="./cover.webp">cover.webp</a>
<a href="./thumb.jpeg">thumb.jpeg</a>
<a href="./README">README</a>
<a>no href</a>
</body></html>
"""


def test_folders_in_document_order_without_parent_links():
    entries = parse_listing(ROOT_LISTING)
    assert entries.folders == ["fibers", "garments", "graphics", "fiber art"]
    assert entries.files == []


def test_files_only_eligible_extensions_in_order():
    entries = parse_listing(CATEGORY_LISTING)
    assert entries.files == [
        "living-room.jpg",
        "abstract-painting-2023.PNG",
        "loop.gif",
        "cover.webp",
        "thumb.jpeg",
    ]
    # subfolder links are categories, never artworks
    assert entries.folders == ["sketches"]


def test_parsing_is_idempotent():
    assert parse_listing(CATEGORY_LISTING) == parse_listing(CATEGORY_LISTING)


def test_counts_match_mixed_document():
    doc = "".join(f'<a href="./c{i}/">c{i}</a><a href="./img{i}.jpg">x</a><a href="./x{i}.txt">t</a>'
                  for i in range(5))
    entries = parse_listing(doc)
    assert len(entries.folders) == 5
    assert len(entries.files) == 5


def test_extract_links_rejects_non_text():
    with pytest.raises(ListingParseError):
        extract_links(b"<a href='x/'>x</a>")


def test_is_image_filename():
    assert is_image_filename("a.JPG")
    assert not is_image_filename("a.jpg.txt")
    assert not is_image_filename("jpg")
