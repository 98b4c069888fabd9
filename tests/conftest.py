# tests/conftest.py
import os

# must be set before comic_mirror.fetchers is imported
os.environ.setdefault("HTTP_RETRY_WAIT", "0")

import pytest

from comic_mirror.errors import FetchError
from comic_mirror.models import ComicSource
from comic_mirror.storage import PageStore

BASE = "https://example.com"


def gif_bytes(n: int) -> bytes:
    return b"GIF89a" + bytes(16) + str(n).encode()


class FakeComicSite:
    """An in-memory comic: /comic/1 .. /comic/N, each linking to its predecessor."""

    def __init__(self, pages: int, self_loop_first: bool = False):
        self.count = pages
        self.self_loop_first = self_loop_first
        self.page_requests = []
        self.image_requests = []
        self.broken_images = set()

    def publish(self, n: int = 1) -> None:
        self.count += n

    def page_url(self, i: int) -> str:
        return f"{BASE}/comic/{i}"

    def image_url(self, i: int) -> str:
        return f"{BASE}/img/{i}.gif"

    def render(self, i: int) -> str:
        if i > 1:
            prev = f'<a class="prev" href="/comic/{i - 1}">&lt; Prev</a>'
        elif self.self_loop_first:
            prev = '<a class="prev" href="/comic/1">&lt; Prev</a>'
        else:
            prev = ""
        return (
            "<html><body>"
            f'<a class="latest" href="/comic/{self.count}">Latest</a>'
            f"<h1 class=\"title\">Page {i} <small>new!</small></h1>"
            f'<img class="strip" src="/img/{i}.gif" title=" hover {i} ">'
            f"{prev}"
            "</body></html>"
        )

    def fetch_page(self, url: str) -> str:
        self.page_requests.append(url)
        prefix = f"{BASE}/comic/"
        if url.startswith(prefix):
            i = int(url[len(prefix):])
            if 1 <= i <= self.count:
                return self.render(i)
        raise FetchError(f"Could not fetch {url}: 404")

    def fetch_image(self, url: str) -> bytes:
        self.image_requests.append(url)
        prefix = f"{BASE}/img/"
        i = int(url[len(prefix):-len(".gif")])
        if i in self.broken_images or i > self.count:
            raise FetchError(f"Could not fetch {url}: 500")
        return gif_bytes(i)


def make_comic(**overrides) -> ComicSource:
    raw = {
        "name": "Example",
        "firstPageUrl": f"{BASE}/comic/1",
        "latestPageLink": "a.latest",
        "previousPageLink": "a.prev",
        "image": "img.strip",
        "altImage": None,
        "titleText": False,
        "commentary": None,
        "pageDate": None,
        "pageTitle": None,
    }
    raw.update(overrides)
    return ComicSource.model_validate(raw)


@pytest.fixture
def comic():
    return make_comic()


@pytest.fixture
def site():
    return FakeComicSite(42)


@pytest.fixture
def store(tmp_path):
    return PageStore(tmp_path / "comics")


@pytest.fixture(autouse=True)
def _env_defaults(monkeypatch, tmp_path):
    monkeypatch.delenv("COMIC_CATALOG", raising=False)
    monkeypatch.setenv("COMIC_OUT_DIR", str(tmp_path / "comics"))
    yield
