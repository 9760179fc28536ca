from domain.models import Artwork, Category, SourceMode
from services.store import CategoryStore


def art(i, category="fibers"):
    return Artwork(id=f"a{i}", title=f"A{i}", image=f"{category}/a{i}.jpg")


def make_store(mode=SourceMode.LISTING):
    store = CategoryStore(mode)
    store.replace_all([
        Category("fibers", "Fiber Art"),
        Category("garments", "Garments"),
        Category("about", "About"),
    ])
    return store


def test_get_unknown_returns_none():
    store = make_store()
    assert store.get("nope") is None
    assert "nope" not in store
    assert store.get("fibers").display_name == "Fiber Art"


def test_navigable_excludes_reserved_and_keeps_order():
    store = make_store()
    assert [c.name for c in store.navigable()] == ["fibers", "garments"]
    assert store.names() == ["fibers", "garments", "about"]


def test_duplicate_names_keep_first():
    store = make_store()
    store.add(Category("fibers", "Other"))
    assert len(store) == 3
    assert store.get("fibers").display_name == "Fiber Art"


def test_listing_mode_replaces_wholesale():
    store = make_store()
    assert store.set_artworks("fibers", [art(1), art(2)])
    assert store.set_artworks("fibers", [art(3)])
    assert [a.id for a in store.get("fibers").artworks] == ["a3"]


def test_manifest_mode_sets_once():
    store = make_store(SourceMode.MANIFEST)
    assert store.set_artworks("fibers", [art(1)])
    assert not store.set_artworks("fibers", [art(2)])
    assert [a.id for a in store.get("fibers").artworks] == ["a1"]


def test_stale_ticket_is_discarded():
    store = make_store()
    first = store.begin_fetch("fibers")
    second = store.begin_fetch("fibers")
    assert store.set_artworks("fibers", [art(2)], ticket=second)
    # the older request resolves last and must not overwrite
    assert not store.set_artworks("fibers", [art(1)], ticket=first)
    assert [a.id for a in store.get("fibers").artworks] == ["a2"]


def test_tickets_are_per_category():
    store = make_store()
    fibers = store.begin_fetch("fibers")
    store.begin_fetch("garments")
    assert store.is_current("fibers", fibers)


def test_total_artworks_counts_navigable_categories():
    store = make_store()
    store.set_artworks("fibers", [art(1), art(2)])
    store.set_artworks("garments", [art(3, "garments")])
    assert store.total_artworks() == 3
    assert not store.set_artworks("missing", [art(4)])
