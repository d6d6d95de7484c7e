from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.adapters.fs.filestore import ImageDirectoryStore
from src.adapters.json_store import JsonShapeStore
from src.api.deps import get_image_store, get_rules, get_shape_store
from src.api.main import create_app
from src.rules.models import Rules

FIXED_TIMESTAMP = 1700000000
FIXED_TOKEN = "deadbeef"


class FixedClock:
    def timestamp(self) -> int:
        return FIXED_TIMESTAMP


@pytest.fixture
def rules() -> Rules:
    return Rules()


@pytest.fixture
def data_file(tmp_path: Path) -> Path:
    return tmp_path / "data" / "blocks.json"


@pytest.fixture
def images_dir(tmp_path: Path) -> Path:
    return tmp_path / "images"


@pytest.fixture
def store(data_file: Path) -> JsonShapeStore:
    return JsonShapeStore(data_file)


@pytest.fixture
def image_store(images_dir: Path) -> ImageDirectoryStore:
    return ImageDirectoryStore(
        str(images_dir),
        clock=FixedClock(),
        token_factory=lambda: FIXED_TOKEN,
    )


@pytest.fixture
def app(store, image_store, rules) -> FastAPI:
    """API app wired to temporary storage."""
    app = create_app(rules=rules)
    app.dependency_overrides[get_rules] = lambda: rules
    app.dependency_overrides[get_shape_store] = lambda: store
    app.dependency_overrides[get_image_store] = lambda: image_store
    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)
