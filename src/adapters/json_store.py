"""
JSON file store for the shape collection.

Implements ShapeStorePort over a single pretty-printed JSON array.

Invariants:
- A missing file is created with the canonical shapes on first load
- A corrupt file is never rewritten by load; the defaults are served instead
- save replaces the file atomically (temp file + rename)
- Writers inside one process are serialised by the store lock; separate
  processes sharing the file are still last-writer-wins
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from src.components.shapes.defaults import default_shapes
from src.components.shapes.models import ShapeRecord

logger = logging.getLogger(__name__)

# Mode of the written catalog file; mkstemp alone would leave it 0600
FILE_MODE = 0o644


class JsonShapeStore:
    """Shape collection persisted as one JSON array in one file."""

    def __init__(self, path: str | Path, *, indent: int = 4) -> None:
        self.path = Path(path)
        self.indent = indent
        self._lock = threading.RLock()

    @contextmanager
    def locked(self) -> Iterator[None]:
        """Hold the store lock for a load-modify-save sequence."""
        with self._lock:
            yield

    def load(self) -> list[ShapeRecord]:
        """Return the stored collection, seeding or falling back to defaults."""
        with self._lock:
            if not self.path.exists():
                shapes = default_shapes()
                logger.info("No shape file at %s, seeding %d defaults", self.path, len(shapes))
                self.save(shapes)
                return shapes

            try:
                with open(self.path, encoding="utf-8") as f:
                    data = json.load(f)
                if not isinstance(data, list):
                    raise TypeError(f"expected a JSON array, got {type(data).__name__}")
                return [ShapeRecord.from_dict(item) for item in data]
            except (OSError, ValueError, TypeError, KeyError) as e:
                logger.warning("Shape file %s is unreadable (%s); serving defaults", self.path, e)
                return default_shapes()

    def dumps(self, shapes: list[ShapeRecord]) -> str:
        """Serialise the collection exactly as it is written to disk."""
        return json.dumps(
            [shape.to_dict() for shape in shapes],
            indent=self.indent,
            ensure_ascii=False,
        )

    def save(self, shapes: list[ShapeRecord]) -> bool:
        """Atomically replace the stored collection. Returns False on failure."""
        payload = self.dumps(shapes)

        with self._lock:
            tmp_name: str | None = None
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                fd, tmp_name = tempfile.mkstemp(
                    dir=self.path.parent,
                    prefix=f".{self.path.name}.",
                    suffix=".tmp",
                )
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(payload)
                    f.write("\n")
                os.chmod(tmp_name, FILE_MODE)
                os.replace(tmp_name, self.path)
                tmp_name = None
            except OSError:
                logger.exception("Could not write shape file %s", self.path)
                return False
            finally:
                if tmp_name is not None and os.path.exists(tmp_name):
                    os.remove(tmp_name)

        return True
