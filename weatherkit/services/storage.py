"""Storage used to locate and read private key files."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Protocol


class KeyStorage(Protocol):
    """Anything that can check for and read a key file by path."""

    def exists(self, path: str) -> bool:
        ...

    def read(self, path: str) -> bytes:
        ...


class LocalKeyStorage:
    """Filesystem storage. Relative paths resolve against ``root`` when one is set."""

    def __init__(self, root: str | Path | None = None) -> None:
        self.root = Path(root) if root else None

    def resolve(self, path: str) -> Path:
        candidate = Path(path).expanduser()
        if self.root is not None and not candidate.is_absolute():
            return self.root / candidate
        return candidate

    def exists(self, path: str) -> bool:
        if not path:
            return False
        return os.path.isfile(self.resolve(path))

    def read(self, path: str) -> bytes:
        return self.resolve(path).read_bytes()


__all__ = ["KeyStorage", "LocalKeyStorage"]
