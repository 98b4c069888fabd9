from __future__ import annotations

from datetime import datetime
from typing import Optional
from dateutil import parser as date_parser

from .document import Document, resolve_url
from .errors import ExtractionError
from .models import ComicSource, DateSpec, Page
from .utils import html_to_text


def parse_date(text: str, spec: DateSpec) -> Optional[str]:
    """Parse a displayed date into YYYY-MM-DD, or None if it doesn't match."""
    try:
        return datetime.strptime(text, spec.format).strftime("%Y-%m-%d")
    except ValueError:
        if not spec.lenient:
            return None
    try:
        return date_parser.parse(text, fuzzy=True).strftime("%Y-%m-%d")
    except (ValueError, OverflowError):
        return None


class PageExtractor:
    """Turns fetched pages of one comic into Page records.

    One extractor is used per update run; it remembers whether the
    date warning was already shown so it is printed only once.
    """

    def __init__(self, comic: ComicSource):
        self.comic = comic
        self.date_warning_shown = False

    def extract(self, html: str, page_url: str) -> Page:
        return self.extract_document(Document(html), page_url)

    def extract_document(self, doc: Document, page_url: str) -> Page:
        comic = self.comic
        image_url = self._image_url(doc, page_url)

        page_title = None
        if comic.page_title:
            page_title = doc.own_text(comic.page_title) or None
        title_text = None
        if comic.title_text:
            title_text = (doc.attr(comic.image, "title") or "").strip() or None

        return Page(
            page_url=page_url,
            image_url=image_url,
            page_date=self._date(doc) if comic.page_date else None,
            page_title=page_title,
            title_text=title_text,
            commentary=self._commentary(doc) if comic.commentary else None,
        )

    def _image_url(self, doc: Document, page_url: str) -> str:
        comic = self.comic
        el = None
        if comic.alt_image:
            el = doc.first(comic.alt_image)
        if el is None:
            el = doc.first(comic.image)
        if el is None:
            raise ExtractionError(f"Image not found: {page_url}")

        if el.name == "img":
            href = el.get("src")
        elif el.name == "a":
            href = el.get("href")
        else:
            raise ExtractionError(f"Image element is neither <img> nor <a> (<{el.name}>): {page_url}")
        if not href or not href.strip():
            raise ExtractionError(f"Image not found: {page_url}")
        return resolve_url(href, comic.first_page_url)

    def _commentary(self, doc: Document) -> Optional[str]:
        html = doc.inner_html(self.comic.commentary)
        if html is None:
            return None
        return html_to_text(html) or None

    def _date(self, doc: Document) -> Optional[str]:
        spec = self.comic.page_date
        displayed = doc.own_text(spec.selector) or ""
        parsed = parse_date(displayed, spec)
        if parsed is None and not self.date_warning_shown:
            self.date_warning_shown = True
            print(f'[WARN] Invalid date format: "{displayed}" does not match "{spec.format}"')
            print("[WARN] (You will only get this warning once per comic)")
        return parsed
