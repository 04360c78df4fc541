"""Pydantic models for the apibake style configuration.

These models validate and type the JSON configuration file
(``apibake-config.json``) that drives colors, base font size and page
geometry of the generated PDF. Keys use camelCase on disk.
"""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

HexColor = Annotated[str, Field(pattern=r"^#[0-9A-Fa-f]{6}$")]


class _ConfigSection(BaseModel):
    """Common settings: camelCase aliases, unknown keys rejected."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        frozen=True,
    )


# ---------------------------------------------------------------------------
# Colors
# ---------------------------------------------------------------------------


class ColorConfig(_ConfigSection):
    """Palette used for text, headers and HTTP method banners."""

    main: HexColor = "#333333"
    secondary: HexColor = "#6B7B8E"
    highlight: HexColor = "#8A3324"
    headers: HexColor = "#2A4D69"
    sub_headers: HexColor = "#4B86B4"
    get_method: HexColor = "#4A90E2"
    put_method: HexColor = "#6B8E23"
    post_method: HexColor = "#D87F0A"
    patch_method: HexColor = "#C2A000"
    delete_method: HexColor = "#D0021B"
    other_methods: HexColor = "#2A4D69"

    def for_method(self, method: str) -> str:
        """Banner color for an HTTP *method* (case-insensitive)."""
        by_method = {
            "get": self.get_method,
            "put": self.put_method,
            "post": self.post_method,
            "patch": self.patch_method,
            "delete": self.delete_method,
        }
        return by_method.get(method.lower(), self.other_methods)


# ---------------------------------------------------------------------------
# Fonts & page format
# ---------------------------------------------------------------------------


class FontConfig(_ConfigSection):
    """Base font size in points; header sizes are derived from it."""

    base_size: float = Field(10, gt=0, le=72)


class FormatConfig(_ConfigSection):
    """Page margins and indentation, in points."""

    indent_step: float = Field(12, ge=0)
    horizontal_margin: float = Field(70, ge=0)
    vertical_margin: float = Field(50, ge=0)


# ---------------------------------------------------------------------------
# Root
# ---------------------------------------------------------------------------


class ApiBakeConfig(_ConfigSection):
    """Root configuration model."""

    color: ColorConfig = Field(default_factory=ColorConfig)
    font: FontConfig = Field(default_factory=FontConfig)
    format: FormatConfig = Field(default_factory=FormatConfig)

    def to_json(self) -> str:
        """Serialize with on-disk (camelCase) keys."""
        return self.model_dump_json(by_alias=True, indent=2)
