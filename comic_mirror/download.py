from __future__ import annotations

from pathlib import Path
from typing import Callable, List, Optional
from urllib.parse import urlparse
from filetype import guess

from .cancel import CancelToken
from .errors import DownloadError
from .fetchers import fetch_image as default_fetch_image
from .models import ComicSource, Page
from .storage import PageStore
from .utils import MAX_NAME_BYTES, sanitize_filename

TITLE_TEXT_DIR = "title texts"
COMMENTARY_DIR = "commentaries"

FetchImage = Callable[[str], bytes]

# room for the longest suffix added to a base name
BASE_NAME_BYTES = MAX_NAME_BYTES - len(" Commentary.txt")


def image_base_name(page_number: int, page: Page) -> str:
    """Stable, sortable file name (without extension) for a page."""
    name = f"{page_number:05d} "
    if page.page_date:
        name += page.page_date + " "
    if page.page_title:
        name += page.page_title
    else:
        url = urlparse(page.page_url)
        name += url.path[1:] + (f"?{url.query}" if url.query else "")
    return sanitize_filename(name, replacement="_", max_bytes=BASE_NAME_BYTES)


def detect_extension(data: bytes) -> Optional[str]:
    kind = guess(data)
    return kind.extension if kind else None


def _write_text(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    # newline="" keeps the CRLF line endings as they are
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(text)


def save_page(comic_dir: Path, page_number: int, page: Page,
              fetch_image: FetchImage = default_fetch_image) -> Path:
    data = fetch_image(page.image_url)

    base = image_base_name(page_number, page)
    ext = detect_extension(data)
    if ext is None:
        raise DownloadError(f"Could not determine file extension of {page.image_url} on page {page.page_url}")

    comic_dir.mkdir(parents=True, exist_ok=True)
    target = comic_dir / f"{base}.{ext}"
    target.write_bytes(data)

    if page.title_text:
        _write_text(comic_dir / TITLE_TEXT_DIR / f"{base} Title Text.txt", page.title_text)
    if page.commentary:
        _write_text(comic_dir / COMMENTARY_DIR / f"{base} Commentary.txt", page.commentary)
    return target


def download_new_pages(
    comic: ComicSource,
    pages: List[Page],
    existing: List[str],
    store: PageStore,
    fetch_image: FetchImage = default_fetch_image,
    token: Optional[CancelToken] = None,
) -> int:
    """Save `pages` (oldest first) and append each image URL to `existing`.

    The page list is written after every saved image and once more on the
    way out, whether the loop finished, was interrupted or hit an error.
    """
    comic_dir = store.comic_dir(comic.name)
    page_number = len(existing)
    downloaded = 0
    try:
        for page in pages:
            if token is not None and token.cancelled:
                break
            page_number += 1
            target = save_page(comic_dir, page_number, page, fetch_image)
            existing.append(page.image_url)
            downloaded += 1
            store.save(comic.name, existing)
            print(f"[save] {downloaded} / {len(pages)}: {target.name}")
    finally:
        store.save(comic.name, existing)
    return downloaded
