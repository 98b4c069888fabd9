from __future__ import annotations

import argparse
import sys
from typing import List, Optional, Sequence, TextIO

from .config import Settings
from .models import ComicSource
from .pipeline import run_selected
from .sources import load_sources
from .storage import PageStore


def select_comics(line: str, comics: List[ComicSource]) -> List[ComicSource]:
    """Turn a line of 1-based, space-separated numbers into comics, in catalog order.

    0 selects every comic; unknown numbers are ignored.
    """
    picked = set()
    for token in line.split():
        try:
            n = int(token)
        except ValueError:
            continue
        if n == 0:
            return list(comics)
        if 0 < n <= len(comics):
            picked.add(n - 1)
    return [comics[i] for i in sorted(picked)]


def print_menu(comics: List[ComicSource]) -> None:
    print("Available comics:")
    print("0\tDOWNLOAD ALL")
    for i, comic in enumerate(comics, start=1):
        print(f"{i}\t{comic.name}")
    print("Enter space-separated numbers of all comics to download:")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="comic-mirror", description="Download new pages of web comics.")
    p.add_argument("--out-dir", default=None, help="Folder the comics are saved in (env COMIC_OUT_DIR)")
    p.add_argument("--catalog", default=None, help="Path to comics.json (env COMIC_CATALOG)")
    p.add_argument("--select", default=None, help='Numbers to download, e.g. "1 3"; skips the prompt')
    return p


def main(argv: Optional[Sequence[str]] = None, stdin: Optional[TextIO] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = Settings.from_env(out_dir=args.out_dir, catalog_path=args.catalog)
    settings.out_dir.mkdir(parents=True, exist_ok=True)

    comics = load_sources(settings.resolve_catalog_path())
    if not comics:
        print("No comics available")
        return 0

    print_menu(comics)
    line = args.select
    if line is None:
        line = (stdin or sys.stdin).readline()
    selected = select_comics(line, comics)

    run_selected(selected, PageStore(settings.out_dir))
    return 0


if __name__ == "__main__":
    sys.exit(main())
