import re

import html2text
from bs4 import BeautifulSoup

ILLEGAL_RE = re.compile(r'[/\?<>\\:\*\|"]')
CONTROL_RE = re.compile(r"[\x00-\x1f\x80-\x9f]")
RESERVED_RE = re.compile(r"^\.+$")
WINDOWS_RESERVED_RE = re.compile(r"^(con|prn|aux|nul|com[0-9]|lpt[0-9])(\..*)?$", re.IGNORECASE)
WINDOWS_TRAILING_RE = re.compile(r"[\. ]+$")
MAX_NAME_BYTES = 255

BARE_LF_RE = re.compile(r"(?<!\r)\n")
HR_RE = re.compile(r"^\* \* \*$", re.MULTILINE)


def sanitize_filename(name: str, replacement: str = "", max_bytes: int = MAX_NAME_BYTES) -> str:
    """Make `name` safe to use as a single path component on any platform."""
    out = ILLEGAL_RE.sub(replacement, name)
    out = CONTROL_RE.sub(replacement, out)
    out = RESERVED_RE.sub(replacement, out)
    out = WINDOWS_RESERVED_RE.sub(replacement, out)
    out = WINDOWS_TRAILING_RE.sub(replacement, out)
    # truncate on a character boundary
    encoded = out.encode("utf-8")[:max_bytes]
    return encoded.decode("utf-8", errors="ignore")


def to_crlf(text: str) -> str:
    return BARE_LF_RE.sub("\r\n", text)


def html_to_text(html: str) -> str:
    """Convert commentary markup to plain Markdown-ish text with CRLF line endings.

    Underlined text becomes __text__ and rules become "- - -".
    """
    soup = BeautifulSoup(html.strip(), "html.parser")
    for u in soup.find_all("u"):
        u.insert_before("__")
        u.insert_after("__")
        u.unwrap()

    h = html2text.HTML2Text()
    h.body_width = 0
    h.ignore_images = True
    h.ignore_links = False
    h.ignore_emphasis = False
    text = HR_RE.sub("- - -", h.handle(str(soup)).strip())
    return to_crlf(text)
