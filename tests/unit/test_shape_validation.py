"""
Tests for shape candidate validation.

Covers the blank predicates, the 4x4 matrix rule, case-insensitive
uniqueness and normalisation of accepted records.
"""

from __future__ import annotations

import pytest

from src.components.shapes import (
    DEFAULT_SHAPES,
    CandidateShape,
    find_by_name,
    is_blank_matrix,
    is_blank_text,
    sniff_image_type,
    validate_candidate,
    validate_image_type,
    validate_matrix,
    validate_required,
)

BAR = [[0, 0, 0, 0], [1, 1, 1, 1], [0, 0, 0, 0], [0, 0, 0, 0]]


def make_candidate(**overrides) -> CandidateShape:
    fields = {
        "name": "X",
        "color": "#123456",
        "description": "test",
        "image": "images/x.svg",
        "matrix": BAR,
    }
    fields.update(overrides)
    return CandidateShape(**fields)


# --- Blank Predicates ---


class TestBlankPredicates:
    @pytest.mark.parametrize("value", ["", "   ", "\t\n", None, 12, ["a"]])
    def test_blank_text(self, value) -> None:
        assert is_blank_text(value)

    def test_text_with_content_is_not_blank(self) -> None:
        assert not is_blank_text("  I ")

    @pytest.mark.parametrize("value", [None, "", "  "])
    def test_blank_matrix(self, value) -> None:
        assert is_blank_matrix(value)

    def test_all_zero_matrix_is_not_blank(self) -> None:
        assert not is_blank_matrix([[0] * 4 for _ in range(4)])


# --- Required Fields ---


class TestRequiredFields:
    @pytest.mark.parametrize("field", ["name", "color", "description", "image"])
    def test_blank_text_field_rejected(self, field: str) -> None:
        errors = validate_required(make_candidate(**{field: "  "}))

        assert len(errors) == 1
        assert errors[0].code == "missing_fields"
        assert errors[0].message == (
            "Missing required fields (name, color, description, image, matrix)"
        )
        assert field in errors[0].field

    def test_missing_matrix_rejected(self) -> None:
        errors = validate_required(make_candidate(matrix=None))
        assert errors[0].code == "missing_fields"
        assert errors[0].field == "matrix"

    def test_complete_candidate_passes(self) -> None:
        assert validate_required(make_candidate()) == []


# --- Matrix ---


class TestMatrix:
    def test_valid_matrix(self) -> None:
        assert validate_matrix(BAR) == []

    def test_all_zero_matrix_accepted(self) -> None:
        assert validate_matrix([[0, 0, 0, 0]] * 4) == []

    @pytest.mark.parametrize(
        "matrix",
        [
            BAR[:3],
            BAR + [[0, 0, 0, 0]],
            [[0, 0, 0, 0, 0], [1, 1, 1, 1], [0, 0, 0, 0], [0, 0, 0, 0]],
            [[0, 0, 0], [1, 1, 1, 1], [0, 0, 0, 0], [0, 0, 0, 0]],
            [[0, 0, 0, 0], "1111", [0, 0, 0, 0], [0, 0, 0, 0]],
            "[[0,0,0,0]]",
            {"rows": 4},
            [],
        ],
    )
    def test_malformed_shapes_rejected(self, matrix) -> None:
        errors = validate_matrix(matrix)

        assert len(errors) == 1
        assert errors[0].code == "malformed_matrix"
        assert errors[0].message == "Matrix must be a 4x4 array"

    @pytest.mark.parametrize("cell", [2, -1, "1", True, 0.5, None])
    def test_non_binary_cell_rejected(self, cell) -> None:
        matrix = [row[:] for row in BAR]
        matrix[0][0] = cell
        assert validate_matrix(matrix)[0].code == "malformed_matrix"


# --- Whole Candidate ---


class TestValidateCandidate:
    def test_accepts_and_normalizes(self) -> None:
        candidate = make_candidate(
            name="  x ",
            color=" #123456 ",
            description=" test  ",
            image=" images/x.svg",
        )

        record, errors = validate_candidate(candidate, DEFAULT_SHAPES)

        assert errors == []
        assert record is not None
        assert record.name == "X"
        assert record.color == "#123456"
        assert record.description == "test"
        assert record.image == "images/x.svg"
        assert record.matrix == tuple(tuple(row) for row in BAR)

    def test_duplicate_name_is_case_insensitive(self) -> None:
        record, errors = validate_candidate(make_candidate(name="l"), DEFAULT_SHAPES)

        assert record is None
        assert errors[0].code == "duplicate_name"
        assert errors[0].message == "Block with this name already exists"

    def test_duplicate_after_trimming(self) -> None:
        record, errors = validate_candidate(make_candidate(name="  i  "), DEFAULT_SHAPES)
        assert record is None
        assert errors[0].code == "duplicate_name"

    def test_missing_fields_checked_before_matrix(self) -> None:
        _, errors = validate_candidate(make_candidate(name="", matrix=BAR[:3]), [])
        assert errors[0].code == "missing_fields"

    def test_matrix_checked_before_uniqueness(self) -> None:
        _, errors = validate_candidate(make_candidate(name="I", matrix=BAR[:3]), DEFAULT_SHAPES)
        assert errors[0].code == "malformed_matrix"

    def test_collection_is_not_modified(self) -> None:
        shapes = list(DEFAULT_SHAPES)
        validate_candidate(make_candidate(), shapes)
        assert shapes == list(DEFAULT_SHAPES)


# --- Lookup & Image Types ---


def test_find_by_name_is_case_insensitive() -> None:
    shape = find_by_name(DEFAULT_SHAPES, " l ")
    assert shape is not None
    assert shape.name == "L"


def test_find_by_name_missing() -> None:
    assert find_by_name(DEFAULT_SHAPES, "X") is None


@pytest.mark.parametrize(
    "content_type",
    ["image/png", "image/svg+xml", "image/jpeg", "image/gif", "IMAGE/PNG", "image/png; q=1"],
)
def test_allowed_image_types(content_type: str) -> None:
    allowed = ["image/png", "image/svg+xml", "image/jpeg", "image/gif"]
    assert validate_image_type(content_type, allowed) == []


@pytest.mark.parametrize("content_type", ["image/webp", "text/plain", "application/pdf", "", None])
def test_rejected_image_types(content_type: str | None) -> None:
    errors = validate_image_type(content_type, ["image/png"])
    assert errors[0].code == "invalid_image_format"
    assert errors[0].message == "Ongeldig afbeeldingsformaat"


@pytest.mark.parametrize(
    ("data", "expected"),
    [
        (b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR", "image/png"),
        (b"\xff\xd8\xff\xe0\x00\x10JFIF", "image/jpeg"),
        (b"GIF87a\x01\x00", "image/gif"),
        (b"GIF89a\x01\x00", "image/gif"),
        (b"<svg/>", "image/svg+xml"),
        (b'<svg xmlns="http://www.w3.org/2000/svg" width="4"></svg>', "image/svg+xml"),
        (b'\xef\xbb\xbf<?xml version="1.0"?>\n<!-- piece -->\n<svg>', "image/svg+xml"),
        (
            b'<?xml version="1.0"?><!DOCTYPE svg PUBLIC "-//W3C//DTD SVG 1.1//EN" '
            b'"http://www.w3.org/Graphics/SVG/1.1/DTD/svg11.dtd"><svg>',
            "image/svg+xml",
        ),
    ],
)
def test_sniff_image_type(data: bytes, expected: str) -> None:
    assert sniff_image_type(data) == expected


@pytest.mark.parametrize(
    "data",
    [
        b"",
        b"<script>alert(1)</script>",
        b"<html><body><svg></svg></body></html>",
        b"<svgfoo/>",
        b"\x89PNG",
        b"%PDF-1.7",
        b"hello",
    ],
)
def test_sniff_rejects_non_images(data: bytes) -> None:
    assert sniff_image_type(data) is None
