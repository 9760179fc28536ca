import asyncio

import httpx
import pytest

from domain.models import Artwork, Category
from services.prefetch import HttpImageLoader, PrefetchCache
from services.store import CategoryStore


def make_store(images_by_category):
    store = CategoryStore()
    store.replace_all([Category(name, name.title()) for name in images_by_category])
    for name, images in images_by_category.items():
        store.set_artworks(name, [Artwork(id=i, title=i, image=f"{name}/{i}.jpg") for i in images])
    return store


class FakeLoader:
    def __init__(self, broken=(), delay=0.0):
        self.broken = set(broken)
        self.delay = delay
        self.calls = []
        self.active = 0
        self.peak = 0

    async def __call__(self, path):
        self.calls.append(path)
        self.active += 1
        self.peak = max(self.peak, self.active)
        await asyncio.sleep(self.delay)
        self.active -= 1
        if path in self.broken:
            raise httpx.ConnectError("unreachable")
        return True


@pytest.mark.asyncio
async def test_progress_reaches_100_with_failures():
    store = make_store({"fibers": ["a", "b", "c"], "garments": ["d", "e"]})
    loader = FakeLoader(broken={"fibers/b.jpg", "garments/e.jpg"})
    cache = PrefetchCache(store, loader)
    assert cache.total == 5
    assert cache.progress().percentage == 0

    progress = await cache.prefetch_all()
    assert progress.percentage == 100
    assert progress.loaded == 3
    assert progress.total == 5
    assert cache.is_prefetched("fibers/a.jpg")
    assert not cache.is_prefetched("fibers/b.jpg")
    assert sorted(cache.failed_paths()) == ["fibers/b.jpg", "garments/e.jpg"]


@pytest.mark.asyncio
async def test_duplicate_paths_requested_once():
    store = make_store({"fibers": ["a"]})
    store.add(Category("copies", "Copies"))
    store.set_artworks("copies", [Artwork(id="a", title="A", image="fibers/a.jpg")])
    loader = FakeLoader()
    cache = PrefetchCache(store, loader)
    await cache.prefetch_all()
    await cache.prefetch_all()
    assert loader.calls == ["fibers/a.jpg"]
    assert cache.total == 1


@pytest.mark.asyncio
async def test_requests_run_concurrently():
    store = make_store({"fibers": [str(i) for i in range(6)]})
    loader = FakeLoader(delay=0.01)
    await PrefetchCache(store, loader).prefetch_all()
    assert loader.peak == 6


@pytest.mark.asyncio
async def test_concurrency_limit():
    store = make_store({"fibers": [str(i) for i in range(6)]})
    loader = FakeLoader(delay=0.01)
    cache = PrefetchCache(store, loader, max_concurrency=2)
    progress = await cache.prefetch_all()
    assert loader.peak <= 2
    assert progress.percentage == 100


@pytest.mark.asyncio
async def test_progress_callback_and_empty_total():
    seen = []
    store = make_store({"fibers": ["a", "b"]})
    await PrefetchCache(store, FakeLoader(), on_progress=seen.append).prefetch_all()
    assert [p.percentage for p in seen] == [50, 100]

    empty = PrefetchCache(make_store({"fibers": []}), FakeLoader())
    assert empty.progress().percentage == 100
    assert (await empty.prefetch_all()).total == 0


@pytest.mark.asyncio
async def test_http_loader_checks_status_and_content_type():
    def handler(request):
        if request.url.path.endswith("ok.jpg"):
            return httpx.Response(200, content=b"\xff\xd8", headers={"Content-Type": "image/jpeg"})
        if request.url.path.endswith("page.jpg"):
            return httpx.Response(200, text="<html>home</html>", headers={"Content-Type": "text/html"})
        return httpx.Response(404)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        loader = HttpImageLoader("http://assets.test/portfolio", client=client)
        assert loader.url_for("fiber art/ok.jpg") == "http://assets.test/portfolio/fiber%20art/ok.jpg"
        assert await loader("fibers/ok.jpg")
        assert not await loader("fibers/page.jpg")
        assert not await loader("fibers/missing.jpg")


@pytest.mark.asyncio
async def test_unexpected_loader_error_counts_as_failure():
    store = make_store({"fibers": ["a", "b"]})

    async def loader(path):
        if path == "fibers/b.jpg":
            raise ValueError("decode failure")
        return True

    progress = await PrefetchCache(store, loader).prefetch_all()
    assert progress.percentage == 100
    assert progress.loaded == 1


@pytest.mark.asyncio
async def test_http_loader_shares_one_client_per_run(monkeypatch):
    created = []
    real_client = httpx.AsyncClient

    def handler(request):
        return httpx.Response(200, content=b"\xff\xd8", headers={"Content-Type": "image/jpeg"})

    def counting_client(**kwargs):
        client = real_client(transport=httpx.MockTransport(handler), **kwargs)
        created.append(client)
        return client

    monkeypatch.setattr(httpx, "AsyncClient", counting_client)
    store = make_store({"fibers": [str(i) for i in range(5)]})
    progress = await PrefetchCache(store, HttpImageLoader("http://assets.test/portfolio")).prefetch_all()
    assert progress.loaded == 5
    assert len(created) == 1
    assert created[0].is_closed
