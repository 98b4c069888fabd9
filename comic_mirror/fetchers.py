from __future__ import annotations

import os
from urllib.parse import urlparse
import requests
from bs4 import UnicodeDammit
from tenacity import retry, stop_after_attempt, wait_fixed

from .errors import FetchError

HTTP_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", "12"))
CONNECT_TIMEOUT = float(os.getenv("CONNECT_TIMEOUT", "5"))
RETRY_WAIT = float(os.getenv("HTTP_RETRY_WAIT", "1"))
UA = os.getenv("HTTP_UA", ("Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
                           "AppleWebKit/537.36 (KHTML, like Gecko) "
                           "Chrome/124.0 Safari/537.36"))

HEADERS = {
    "User-Agent": UA,
    "Accept": "text/html,application/xhtml+xml,image/*;q=0.9,*/*;q=0.8",
}


def _announce_retry(retry_state) -> None:
    url = retry_state.args[0] if retry_state.args else "?"
    exc = retry_state.outcome.exception() if retry_state.outcome else None
    print(f"[retry] {url}: {exc}; retrying")


# one immediate retry for transient network issues
@retry(stop=stop_after_attempt(2), wait=wait_fixed(RETRY_WAIT),
       before_sleep=_announce_retry, reraise=True)
def _get(url: str) -> requests.Response:
    r = requests.get(url, headers=HEADERS, timeout=(CONNECT_TIMEOUT, HTTP_TIMEOUT))
    r.raise_for_status()
    return r


def _checked_get(url: str) -> requests.Response:
    scheme = urlparse(url).scheme
    if scheme not in ("http", "https"):
        raise FetchError(f"Unsupported protocol: {scheme or url}")
    try:
        return _get(url)
    except requests.RequestException as e:
        raise FetchError(f"Could not fetch {url}: {e}") from e


def _page_text(r: requests.Response) -> str:
    """Decode a page, trusting the charset only when the server declares one.

    Without one, requests falls back to ISO-8859-1; try UTF-8 instead,
    then the <meta> charset.
    """
    if "charset=" in r.headers.get("Content-Type", "").lower():
        return r.text
    dammit = UnicodeDammit(r.content, user_encodings=["utf-8"], is_html=True)
    if dammit.unicode_markup is None:
        return r.text
    return dammit.unicode_markup


def fetch_page(url: str) -> str:
    return _page_text(_checked_get(url))


def fetch_image(url: str) -> bytes:
    return _checked_get(url).content
