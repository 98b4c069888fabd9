from __future__ import annotations

import sys
from typing import List

from .cancel import CancelToken, interrupt_handler
from .download import FetchImage, download_new_pages
from .errors import Interrupted
from .fetchers import fetch_image as default_fetch_image, fetch_page as default_fetch_page
from .locator import FetchPage, find_new_pages
from .models import ComicSource, UpdateResult
from .storage import PageStore


def update_comic(
    comic: ComicSource,
    store: PageStore,
    fetch_page: FetchPage = default_fetch_page,
    fetch_image: FetchImage = default_fetch_image,
) -> int:
    """Download all pages newer than the last saved one. Returns how many were saved.

    Each phase gets its own cancel token: an interrupt while searching
    drops everything found, an interrupt while downloading keeps what was
    saved so far.
    """
    existing = store.load(comic.name)
    last_saved = existing[-1] if existing else None

    with interrupt_handler(CancelToken()) as token:
        try:
            new_pages = find_new_pages(comic, last_saved, fetch_page, token)
        except Interrupted:
            print(f"[find] {comic.name}: interrupted, nothing saved")
            return 0
    print(f"[find] {comic.name}: {len(new_pages)} new image(s)")

    with interrupt_handler(CancelToken()) as token:
        return download_new_pages(comic, new_pages, existing, store, fetch_image, token)


def run_selected(
    comics: List[ComicSource],
    store: PageStore,
    fetch_page: FetchPage = default_fetch_page,
    fetch_image: FetchImage = default_fetch_image,
) -> List[UpdateResult]:
    results: List[UpdateResult] = []
    for comic in comics:
        print(f'Updating comic "{comic.name}"')
        try:
            n = update_comic(comic, store, fetch_page, fetch_image)
        except Exception as e:
            print(f'Error while updating comic "{comic.name}":', file=sys.stderr)
            print(f"  {type(e).__name__}: {e}", file=sys.stderr)
            results.append(UpdateResult(name=comic.name, error=str(e)))
            continue
        print(f"Downloaded {n} new page{'' if n == 1 else 's'}")
        results.append(UpdateResult(name=comic.name, downloaded=n))
    return results
