"""Text style records used by the style stack."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional


class FontFace(int, Enum):
    """Font faces available to the text flow."""

    NORM = 0
    BOLD = 1
    ITALIC = 2
    BOLD_ITALIC = 3
    MONOSPACE = 4


@dataclass(frozen=True)
class StylePatch:
    """Partial style; ``None`` fields inherit from the current style."""

    font: Optional[FontFace] = None
    font_size: Optional[float] = None
    fill_color: Optional[str] = None
    left_margin: Optional[float] = None
    line_gap: Optional[float] = None


@dataclass(frozen=True)
class Style:
    """Fully resolved text style."""

    font: FontFace
    font_size: float
    fill_color: str
    left_margin: float
    line_gap: float

    def merged(self, patch: StylePatch) -> Style:
        """Apply *patch* on top of this style.

        Scalars override; ``left_margin`` is added to ours so nested
        indents accumulate.
        """
        return replace(
            self,
            font=self.font if patch.font is None else patch.font,
            font_size=self.font_size if patch.font_size is None else patch.font_size,
            fill_color=self.fill_color if patch.fill_color is None else patch.fill_color,
            left_margin=self.left_margin + (patch.left_margin or 0.0),
            line_gap=self.line_gap if patch.line_gap is None else patch.line_gap,
        )
