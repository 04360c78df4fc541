"""Composition Root: wires the fpdf2 surface into the document engine.

This module is the ONLY place where the concrete PDF adapter is imported.
All other layers refer to the RenderSurface port.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from apibake.adapters.pdf_adapter import PdfSurface
from apibake.application.use_cases.generate_demo import GenerateDemoUseCase
from apibake.config import ApiBakeConfig, load_config
from apibake.engine.document import ApiDocument


class Container:
    """Simple dependency injection container.

    Usage::

        container = Container("apibake-config.json")
        doc = container.create_document(Path("api.pdf"))
    """

    def __init__(
        self,
        config_path: Optional[str] = None,
        config: Optional[ApiBakeConfig] = None,
    ) -> None:
        # Load (and validate) before any output file is opened.
        self.config = config or load_config(Path(config_path) if config_path else None)

    def create_document(self, output_path: Path) -> ApiDocument:
        surface = PdfSurface(Path(output_path), self.config.format)
        return ApiDocument(surface, self.config)

    def generate_demo(self) -> GenerateDemoUseCase:
        return GenerateDemoUseCase(self.create_document)
