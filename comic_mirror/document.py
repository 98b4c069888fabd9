from __future__ import annotations

from typing import Optional
from urllib.parse import urljoin, urlparse
from bs4 import BeautifulSoup, Comment, NavigableString, Tag


def resolve_url(href: str, first_page_url: str) -> str:
    """Resolve `href` against the origin of the comic's first page."""
    base = urlparse(first_page_url)
    return urljoin(f"{base.scheme}://{base.netloc}/", href.strip())


class Document:
    """A fetched page, queried with CSS selectors."""

    def __init__(self, html: str):
        self.soup = BeautifulSoup(html, "html.parser")

    def first(self, selector: str) -> Optional[Tag]:
        return self.soup.select_one(selector)

    def attr(self, selector: str, name: str) -> Optional[str]:
        el = self.first(selector)
        if el is None:
            return None
        value = el.get(name)
        if isinstance(value, list):  # multi-valued attributes like class
            value = " ".join(value)
        return value or None

    def own_text(self, selector: str) -> Optional[str]:
        """Text of every match with all child elements removed, joined."""
        matches = self.soup.select(selector)
        if not matches:
            return None
        parts = [
            s for el in matches for s in el.children
            if isinstance(s, NavigableString) and not isinstance(s, Comment)
        ]
        return "".join(parts).strip()

    def inner_html(self, selector: str) -> Optional[str]:
        el = self.first(selector)
        if el is None:
            return None
        return el.decode_contents()
