"""apibake configuration package."""

from apibake.config.loader import export_config, get_config, load_config, parse_config
from apibake.config.models import ApiBakeConfig

__all__ = ["ApiBakeConfig", "export_config", "get_config", "load_config", "parse_config"]
