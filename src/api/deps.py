import logging
import os
from functools import lru_cache
from pathlib import Path

from fastapi import Depends

from src.adapters.fs.filestore import ImageDirectoryStore
from src.adapters.json_store import JsonShapeStore
from src.rules.loader import load_rules
from src.rules.models import Rules

logger = logging.getLogger(__name__)


# --- Settings ---
class Settings:
    def __init__(self) -> None:
        self.base_dir = Path(os.getcwd())
        self.data_dir = Path(os.environ.get("TETRO_DATA_DIR", "./data"))
        self.images_dir = Path(os.environ.get("TETRO_IMAGES_DIR", "./images"))
        self.rules_path = Path(os.environ.get("TETRO_RULES_PATH", str(self.base_dir / "rules.yaml")))
        self.log_level = os.environ.get("TETRO_LOG_LEVEL", "INFO").upper()


@lru_cache
def get_settings() -> Settings:
    return Settings()


# --- Rules ---
@lru_cache
def get_rules() -> Rules:
    path = get_settings().rules_path
    if not path.exists():
        logger.warning("Rules file %s not found, using built-in defaults", path)
        return Rules()
    return load_rules(path)


# --- Stores ---
# One store per data file so every request shares the same store lock.
_shape_stores: dict[Path, JsonShapeStore] = {}


def get_shape_store(
    settings: Settings = Depends(get_settings),
    rules: Rules = Depends(get_rules),
) -> JsonShapeStore:
    path = (settings.data_dir / rules.storage.data_file_name).resolve()
    store = _shape_stores.get(path)
    if store is None:
        store = JsonShapeStore(path, indent=rules.storage.json_indent)
        _shape_stores[path] = store
    return store


def get_image_store(
    settings: Settings = Depends(get_settings),
    rules: Rules = Depends(get_rules),
) -> ImageDirectoryStore:
    return ImageDirectoryStore(
        base_path=str(settings.images_dir),
        public_prefix=rules.uploads.public_prefix,
    )


class ShapeRulesAdapter:
    """Adapter to map generic Rules to the shapes component RulesPort."""

    def __init__(self, rules: Rules):
        self._rules = rules.uploads

    def get_allowed_image_types(self) -> list[str]:
        return self._rules.allowlist_mime_types


def get_shape_rules(rules: Rules = Depends(get_rules)) -> ShapeRulesAdapter:
    return ShapeRulesAdapter(rules)
