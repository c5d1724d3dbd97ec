"""Square coordinates and helpers.

Board layout (file, rank), both 0-7:
    a1=(0, 0), b1=(1, 0), ..., h1=(7, 0)
    ...
    a8=(0, 7), ..., h8=(7, 7)

Out-of-range squares are representable on purpose: the board reads them as
permanently empty, which keeps ray walking free of bounds checks.
"""

from __future__ import annotations

from typing import NamedTuple


class Square(NamedTuple):
    """A (file, rank) pair. Plain tuples compare equal to squares."""

    file: int
    rank: int

    @property
    def is_valid(self) -> bool:
        return 0 <= self.file < 8 and 0 <= self.rank < 8

    def offset(self, df: int, dr: int) -> Square:
        return Square(self.file + df, self.rank + dr)

    def __str__(self) -> str:
        if self.is_valid:
            return square_name(self)
        return f"({self.file}, {self.rank})"


def is_valid_square(file: int, rank: int) -> bool:
    """Check whether a coordinate pair lies on the board."""
    return 0 <= file < 8 and 0 <= rank < 8


def square_name(sq: tuple[int, int]) -> str:
    """Human-readable name, e.g. (0, 0) -> 'a1', (7, 7) -> 'h8'."""
    file, rank = sq
    if not is_valid_square(file, rank):
        raise ValueError(f"Square off the board: {sq!r}")
    return chr(ord("a") + file) + str(rank + 1)


def parse_square(name: str) -> Square:
    """Parse square name, e.g. 'e4' -> Square(4, 3)."""
    if len(name) != 2 or name[0] not in "abcdefgh" or name[1] not in "12345678":
        raise ValueError(f"Invalid square name: {name!r}")
    return Square(ord(name[0]) - ord("a"), int(name[1]) - 1)


ALL_SQUARES: tuple[Square, ...] = tuple(
    Square(file, rank) for file in range(8) for rank in range(8)
)

# ── Named square constants ──────────────────────────────────────────────────

A1, B1, C1, D1, E1, F1, G1, H1 = (Square(f, 0) for f in range(8))
A2, B2, C2, D2, E2, F2, G2, H2 = (Square(f, 1) for f in range(8))
A3, B3, C3, D3, E3, F3, G3, H3 = (Square(f, 2) for f in range(8))
A4, B4, C4, D4, E4, F4, G4, H4 = (Square(f, 3) for f in range(8))
A5, B5, C5, D5, E5, F5, G5, H5 = (Square(f, 4) for f in range(8))
A6, B6, C6, D6, E6, F6, G6, H6 = (Square(f, 5) for f in range(8))
A7, B7, C7, D7, E7, F7, G7, H7 = (Square(f, 6) for f in range(8))
A8, B8, C8, D8, E8, F8, G8, H8 = (Square(f, 7) for f in range(8))
