"""
Catalog invariants.

- Names are unique, case-insensitively
- Every stored matrix is 4x4 with 0/1 cells
- The collection only grows, in submission order
- Rejected creates leave the stored file byte-for-byte unchanged
"""

import json
import random

import pytest

from src.components.shapes import DEFAULT_SHAPES


def random_matrix(rng: random.Random, rows: int = 4, cols: int = 4) -> list[list[int]]:
    return [[rng.randint(0, 1) for _ in range(cols)] for _ in range(rows)]


def block(name: str, matrix) -> dict:
    return {
        "name": name,
        "color": "#000000",
        "description": f"Blok {name}",
        "image": f"images/{name}.svg",
        "matrix": matrix,
    }


def test_insertion_order_and_lookup(client):
    rng = random.Random(7)
    names = [f"P{i}" for i in range(12)]

    for name in names:
        matrix = random_matrix(rng)
        response = client.post("/blocks", json=block(name.lower(), matrix))
        assert response.status_code == 201
        assert client.get("/blocks", params={"block": name}).json()["matrix"] == matrix

    listed = [b["name"] for b in client.get("/blocks").json()]
    assert listed == [s.name for s in DEFAULT_SHAPES] + names


@pytest.mark.parametrize(
    ("rows", "cols"),
    [(3, 4), (5, 4), (4, 3), (4, 5), (1, 16)],
)
def test_wrong_dimensions_always_rejected(client, data_file, rows, cols):
    client.get("/blocks")
    before = data_file.read_bytes()

    rng = random.Random(rows * 10 + cols)
    response = client.post("/blocks", json=block("NEW", random_matrix(rng, rows, cols)))

    assert response.status_code == 400
    assert response.json() == {"error": "Matrix must be a 4x4 array"}
    assert data_file.read_bytes() == before


def test_stored_names_are_unique(client, data_file):
    for name in ["a", "A", " a ", "b", "B"]:
        client.post("/blocks", json=block(name, [[0] * 4] * 4))

    stored = json.loads(data_file.read_text(encoding="utf-8"))
    upper = [entry["name"].upper() for entry in stored]
    assert len(upper) == len(set(upper))
    assert upper[-2:] == ["A", "B"]


def test_every_stored_matrix_is_binary_4x4(client, data_file):
    client.post("/blocks", json=block("Q", [[1, 1, 0, 0], [1, 1, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]]))
    client.post("/blocks", json=block("R", [[2, 0, 0, 0]] * 4))

    for entry in json.loads(data_file.read_text(encoding="utf-8")):
        assert len(entry["matrix"]) == 4
        for row in entry["matrix"]:
            assert len(row) == 4
            assert set(row) <= {0, 1}
