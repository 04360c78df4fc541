"""apibake: render API reference documents to PDF."""

from apibake.config import ApiBakeConfig, load_config
from apibake.domain.errors import (
    ApiBakeError,
    ConfigurationError,
    DocumentGenerationError,
    DocumentStateError,
    HeaderNestingError,
    OutputWriteError,
)
from apibake.domain.models import DataField, FieldType, FontFace, Style, StylePatch
from apibake.engine.document import ApiDocument

__version__ = "0.3.0"

__all__ = [
    "ApiBakeConfig",
    "ApiBakeError",
    "ApiDocument",
    "ConfigurationError",
    "DataField",
    "DocumentGenerationError",
    "DocumentStateError",
    "FieldType",
    "FontFace",
    "HeaderNestingError",
    "OutputWriteError",
    "Style",
    "StylePatch",
    "load_config",
]
