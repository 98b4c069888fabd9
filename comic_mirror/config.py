from __future__ import annotations

import os
from pathlib import Path
from typing import Optional
from pydantic import BaseModel

CATALOG_FILE = "comics.json"
DEFAULT_CATALOG = Path(__file__).resolve().parent / CATALOG_FILE


class Settings(BaseModel):
    out_dir: Path = Path(".")
    catalog_path: Optional[Path] = None

    @classmethod
    def from_env(cls, **overrides) -> "Settings":
        values = {
            "out_dir": os.getenv("COMIC_OUT_DIR") or ".",
            "catalog_path": os.getenv("COMIC_CATALOG") or None,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    def resolve_catalog_path(self) -> Path:
        """Explicit catalog, else comics.json in the output folder, else the bundled one."""
        if self.catalog_path is not None:
            if not self.catalog_path.is_file():
                raise FileNotFoundError(f"No {CATALOG_FILE} file found at {self.catalog_path}")
            return self.catalog_path
        local = self.out_dir / CATALOG_FILE
        if local.is_file():
            return local
        if DEFAULT_CATALOG.is_file():
            return DEFAULT_CATALOG
        raise FileNotFoundError(f"No {CATALOG_FILE} file found")
