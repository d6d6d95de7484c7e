"""
The seven canonical tetrominoes seeded into a fresh catalog.

Matrices are the classic shapes in their default rotation; data files written
by earlier versions of the catalog contain exactly these cells.
"""

from __future__ import annotations

from .models import ShapeRecord

DEFAULT_SHAPES: tuple[ShapeRecord, ...] = (
    ShapeRecord(
        name="I",
        color="#00FFFF",
        description="De I-block is een lange rechte staaf van vier blokjes.",
        image="images/Tetromino_I.svg",
        matrix=(
            (0, 0, 0, 0),
            (1, 1, 1, 1),
            (0, 0, 0, 0),
            (0, 0, 0, 0),
        ),
    ),
    ShapeRecord(
        name="O",
        color="#FFFF00",
        description="De O-block is een vierkant van 2 bij 2 blokjes.",
        image="images/Tetromino_O.svg",
        matrix=(
            (0, 1, 1, 0),
            (0, 1, 1, 0),
            (0, 0, 0, 0),
            (0, 0, 0, 0),
        ),
    ),
    ShapeRecord(
        name="T",
        color="#800080",
        description=(
            "De T-block heeft een T-vorm met drie blokjes op een rij "
            "en één in het midden erboven."
        ),
        image="images/Tetromino_T.svg",
        matrix=(
            (0, 1, 0, 0),
            (1, 1, 1, 0),
            (0, 0, 0, 0),
            (0, 0, 0, 0),
        ),
    ),
    ShapeRecord(
        name="S",
        color="#00FF00",
        description="De S-block bestaat uit twee rijen van twee blokjes die verspringen.",
        image="images/Tetromino_S.svg",
        matrix=(
            (0, 1, 1, 0),
            (1, 1, 0, 0),
            (0, 0, 0, 0),
            (0, 0, 0, 0),
        ),
    ),
    ShapeRecord(
        name="Z",
        color="#FF0000",
        description="De Z-block is de spiegeling van de S-block.",
        image="images/Tetromino_Z.svg",
        matrix=(
            (1, 1, 0, 0),
            (0, 1, 1, 0),
            (0, 0, 0, 0),
            (0, 0, 0, 0),
        ),
    ),
    ShapeRecord(
        name="J",
        color="#0000FF",
        description="De J-block lijkt op een omgekeerde L met een blokje links onderaan.",
        image="images/Tetromino_J.svg",
        matrix=(
            (1, 0, 0, 0),
            (1, 1, 1, 0),
            (0, 0, 0, 0),
            (0, 0, 0, 0),
        ),
    ),
    ShapeRecord(
        name="L",
        color="#FFA500",
        description="De L-block heeft drie blokjes op een rij met één blokje rechts onderaan.",
        image="images/Tetromino_L.svg",
        matrix=(
            (0, 0, 1, 0),
            (1, 1, 1, 0),
            (0, 0, 0, 0),
            (0, 0, 0, 0),
        ),
    ),
)


def default_shapes() -> list[ShapeRecord]:
    """Fresh list of the canonical shapes."""
    return list(DEFAULT_SHAPES)
