from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import List

PAGES_FILE = "pages.json"


class PageStore:
    """Per-comic list of saved image URLs, oldest first.

    The last entry marks where the next update stops walking back.
    """

    def __init__(self, out_dir: Path):
        self.out_dir = Path(out_dir)

    def comic_dir(self, name: str) -> Path:
        return self.out_dir / name

    def path_for(self, name: str) -> Path:
        return self.comic_dir(name) / PAGES_FILE

    def load(self, name: str) -> List[str]:
        path = self.path_for(name)
        path.parent.mkdir(parents=True, exist_ok=True)
        if not path.exists():
            self.save(name, [])
            return []
        with open(path, "r", encoding="utf-8") as f:
            return list(json.load(f))

    def save(self, name: str, pages: List[str]) -> None:
        path = self.path_for(name)
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(prefix=".pages-", suffix=".json", dir=path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(pages, f, indent="\t")
            os.replace(tmp, path)
        except BaseException:
            if os.path.exists(tmp):
                os.remove(tmp)
            raise
