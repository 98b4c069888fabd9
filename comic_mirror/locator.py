from __future__ import annotations

from typing import Callable, List, Optional

from .cancel import CancelToken
from .document import Document, resolve_url
from .errors import Interrupted, NavigationError
from .extract import PageExtractor
from .fetchers import fetch_page as default_fetch_page
from .models import ComicSource, Page

FetchPage = Callable[[str], str]


def find_latest_page_url(comic: ComicSource, fetch_page: FetchPage = default_fetch_page) -> str:
    """Follow the latest-page hops, starting at the comic's first page."""
    url = comic.first_page_url
    for selector in comic.latest_page_link.hops:
        href = Document(fetch_page(url)).attr(selector, "href")
        if not href:
            raise NavigationError(f'Link to latest page not found: "{selector}"')
        url = resolve_url(href, comic.first_page_url)
    return url


def find_new_pages(
    comic: ComicSource,
    last_saved: Optional[str],
    fetch_page: FetchPage = default_fetch_page,
    token: Optional[CancelToken] = None,
    extractor: Optional[PageExtractor] = None,
) -> List[Page]:
    """Walk back from the latest page until the last saved image is reached.

    Returns the new pages oldest first. Only the last saved image URL is
    compared, so an edited page behind an unchanged one is not noticed.
    Raises Interrupted if `token` is cancelled; nothing found so far is kept.
    """
    extractor = extractor or PageExtractor(comic)
    new_pages: List[Page] = []
    next_link = find_latest_page_url(comic, fetch_page)

    while True:
        if token is not None and token.cancelled:
            raise Interrupted(f"search for new pages of {comic.name} interrupted")

        doc = Document(fetch_page(next_link))
        page = extractor.extract_document(doc, next_link)
        if last_saved is not None and page.image_url == last_saved:
            break

        new_pages.append(page)
        print(f"[find] {len(new_pages)} new image(s) found: {page.page_url}")

        prev = doc.attr(comic.previous_page_link, "href")
        if not prev:
            break
        next_link = resolve_url(prev, comic.first_page_url)
        # some comics don't disable the "previous" link on their first page
        if next_link == page.page_url:
            break

    new_pages.reverse()
    return new_pages
