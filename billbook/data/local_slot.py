"""A named, durable key-value slot on the local disk."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from billbook.errors import StorageCorruptionError


class LocalSlot:
    """Holds one text value under ``key`` inside ``directory``."""

    def __init__(self, directory: Path | str, key: str) -> None:
        self.directory = Path(directory)
        self.key = key

    @property
    def path(self) -> Path:
        return self.directory / f"{self.key}.json"

    def read(self) -> Optional[str]:
        """Return the stored value, or None if nothing was written yet.

        Raises StorageCorruptionError when the stored bytes are not text.
        """
        if not self.path.exists():
            return None
        try:
            return self.path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise StorageCorruptionError(f"{self.path} is not valid UTF-8: {exc}") from exc

    def write(self, value: str) -> None:
        """Replace the stored value wholesale."""
        self.directory.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(f"{self.path.name}.tmp")
        tmp_path.write_text(value, encoding="utf-8")
        os.replace(tmp_path, self.path)

    def clear(self) -> None:
        if self.path.exists():
            self.path.unlink()
