"""Data field models rendered by ``data_fields`` and ``object_schema``."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class FieldType(BaseModel):
    """Type annotation of a field, optionally linked to a schema anchor."""

    text: str = Field(..., description="Type name as printed, e.g. 'string' or 'Pet[]'")
    anchor: Optional[str] = Field(None, description="Destination the type links to")


class DataField(BaseModel):
    """One ``name[?]: type;  // description`` row."""

    name: str
    required: bool = True
    type: Optional[FieldType] = None
    description: Optional[str] = None

    @property
    def label(self) -> str:
        """Field name, suffixed with ``?`` when optional."""
        return self.name if self.required else f"{self.name}?"

    @property
    def type_label(self) -> Optional[str]:
        """Type text terminated by ``;``, or ``None`` when untyped."""
        if self.type is None or not self.type.text:
            return None
        return f"{self.type.text};"
