"""Read-only store for the admin UI's built assets.

Assets are loaded once, when the store is built, and never change
afterwards. The store is passed explicitly to create_api_app().
"""

from __future__ import annotations

__all__ = ["AssetStore"]

import mimetypes
from collections.abc import Mapping
from pathlib import Path, PurePosixPath
from types import MappingProxyType


class AssetStore:
    """Immutable mapping of relative POSIX paths to file contents."""

    def __init__(self, files: Mapping[str, bytes] | None = None) -> None:
        self._files: Mapping[str, bytes] = MappingProxyType(dict(files or {}))

    @classmethod
    def from_directory(cls, root: Path) -> "AssetStore":
        """Load every file under ``root``.

        Args:
            root: Build output directory (e.g. web/build).

        Returns:
            AssetStore keyed by paths relative to root ("index.html",
            "static/js/main.js", ...).

        Raises:
            FileNotFoundError: If root is not a directory.
        """
        if not root.is_dir():
            raise FileNotFoundError(f"Asset directory not found: {root}")
        files = {
            path.relative_to(root).as_posix(): path.read_bytes()
            for path in sorted(root.rglob("*"))
            if path.is_file()
        }
        return cls(files)

    def __len__(self) -> int:
        return len(self._files)

    def has(self, path: str) -> bool:
        key = _normalize(path)
        return key is not None and key in self._files

    def get(self, path: str) -> bytes:
        """Return the content of ``path``.

        Raises:
            KeyError: If the asset does not exist.
        """
        key = _normalize(path)
        if key is None or key not in self._files:
            raise KeyError(path)
        return self._files[key]

    @staticmethod
    def media_type(path: str) -> str:
        media_type, _ = mimetypes.guess_type(path)
        return media_type or "application/octet-stream"


def _normalize(path: str) -> str | None:
    """Normalize a request path to a store key; None for traversal attempts."""
    parts = PurePosixPath(path.lstrip("/")).parts
    if any(part in ("..", ".") for part in parts):
        return None
    return "/".join(parts)
