from scripts.serve_portfolio import DEFAULT_MIME, content_type_for, fallback_document, render_listing
from utils.listing_parser import parse_listing


def test_generated_listing_is_readable_by_the_parser():
    doc = render_listing("/portfolio/", [("fibers", True), ("fiber art", True), ("coat.jpg", False), ("notes.txt", False)])
    assert doc.index('href="../"') < doc.index('href="./fibers/"')
    entries = parse_listing(doc)
    assert entries.folders == ["fibers", "fiber art"]
    assert entries.files == ["coat.jpg"]


def test_content_types():
    assert content_type_for("a/b.PNG") == "image/png"
    assert content_type_for("index.html") == "text/html"
    assert content_type_for("archive.xyz") == DEFAULT_MIME
    assert content_type_for("noext") == DEFAULT_MIME


def test_fallback_document_stashes_requested_path():
    doc = fallback_document("/garments", "http://localhost:8501/")
    assert "?redirect=" in doc
    assert '"/garments"' in doc
    assert '"http://localhost:8501/"' in doc
