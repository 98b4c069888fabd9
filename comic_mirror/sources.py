from __future__ import annotations

import json
from pathlib import Path
from typing import Any, List, Optional
from pydantic import ValidationError

from .models import ComicSource


def validate_source(raw: Any) -> Optional[ComicSource]:
    """Return the parsed comic, or None if it is disabled or malformed."""
    if not isinstance(raw, dict) or raw.get("disabled"):
        return None
    try:
        return ComicSource.model_validate(raw)
    except ValidationError:
        return None


def parse_sources(entries: List[Any]) -> List[ComicSource]:
    """Valid, uniquely named comics sorted by name. Invalid entries are hidden."""
    seen = set()
    comics: List[ComicSource] = []
    for raw in entries:
        comic = validate_source(raw)
        if comic is None or comic.name in seen:
            continue
        seen.add(comic.name)
        comics.append(comic)
    return sorted(comics, key=lambda c: c.name)


def load_sources(path: Path) -> List[ComicSource]:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, list):
        data = []
    comics = parse_sources(data)
    print(f"[sources] loaded: {len(comics)} of {len(data)} from {path}")
    return comics
