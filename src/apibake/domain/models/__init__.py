"""Domain models: public API."""

from apibake.domain.models.fields import DataField, FieldType
from apibake.domain.models.style import FontFace, Style, StylePatch

__all__ = [
    "DataField",
    "FieldType",
    "FontFace",
    "Style",
    "StylePatch",
]
