"""Move value object."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

from chessrules.core.types import Square

# Historical upper bound on candidates for one piece; informational only.
MAX_CANDIDATES = 28


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable value object representing a single move.

    ``is_capture`` is also set on quiet attack probes produced while the
    generator maps out attacked squares; such probes never reach a host.
    """

    from_sq: Square
    to_sq: Square
    is_capture: bool = False
    is_castling: bool = False
    is_en_passant: bool = False

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        return f"{Square(*self.from_sq)}{Square(*self.to_sq)}"


MoveList: TypeAlias = list[Move]
