"""File-backed cart storage — one JSON document per session on local disk."""

import re
from pathlib import Path

from storefront.cart.storage.port import CartStorage

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_.-]")


class FileCartStorage(CartStorage):
    """Persist a session's cart snapshot as ``<directory>/<key>.json``."""

    def __init__(self, directory: str | Path, key: str) -> None:
        self.directory = Path(directory)
        self.key = key

    @property
    def path(self) -> Path:
        return self.directory / f"{_UNSAFE_CHARS.sub('_', self.key)}.json"

    def load(self) -> str | None:
        if not self.path.exists():
            return None
        return self.path.read_text(encoding="utf-8")

    def save(self, data: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        # Readers only ever see a complete snapshot
        tmp_path = self.path.with_suffix(".json.tmp")
        tmp_path.write_text(data, encoding="utf-8")
        tmp_path.replace(self.path)
