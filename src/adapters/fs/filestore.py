import os
import re
import secrets
from collections.abc import Callable
from pathlib import Path, PurePath
from typing import Protocol

from src.adapters.clock import SystemClock

UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]")


class TimestampPort(Protocol):
    def timestamp(self) -> int: ...


class ImageDirectoryStore:
    """Uploaded images kept flat in one directory, referenced by public prefix."""

    def __init__(
        self,
        base_path: str,
        *,
        public_prefix: str = "images",
        clock: TimestampPort | None = None,
        token_factory: Callable[[], str] | None = None,
    ):
        self.base_path = Path(base_path).resolve()
        self.public_prefix = public_prefix.strip("/")
        self._clock = clock or SystemClock()
        self._token = token_factory or (lambda: secrets.token_hex(4))

    def _safe_path(self, name: str) -> Path:
        # Prevent traversal
        target = (self.base_path / name).resolve()
        if target.parent != self.base_path:
            raise ValueError(f"Path traversal attempt detected: {name}")
        return target

    def reserve_name(self, original_filename: str, extension: str) -> str:
        """<safe base>_<unix seconds>_<8 hex>.<extension>; the client's own extension is dropped."""
        original = PurePath(original_filename.replace("\\", "/")).name
        stem = original.rpartition(".")[0] or original

        base = UNSAFE_CHARS.sub("_", stem) or "image"
        name = f"{base}_{self._clock.timestamp()}_{self._token()}"
        ext = UNSAFE_CHARS.sub("_", extension.lstrip("."))
        return f"{name}.{ext}" if ext else name

    def public_path(self, name: str) -> str:
        return f"{self.public_prefix}/{name}" if self.public_prefix else name

    def save(self, name: str, data: bytes) -> str:
        """Write the file and return its public path."""
        target = self._safe_path(name)
        self.base_path.mkdir(parents=True, exist_ok=True)
        with open(target, "wb") as f:
            f.write(data)
        return self.public_path(name)

    def delete(self, name: str) -> None:
        target = self._safe_path(name)
        if target.exists():
            os.remove(target)
