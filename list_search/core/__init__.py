"""Core package for list search.

Configuration management and query parsing shared by the filters and the
ranking layer.
"""

from .config import Config, RankerSettings, get_config, reload_config
from .config_error import ConfigurationError, ConfigParseError, ConfigValidationError
from .query_parser import ParsedQuery, QueryKind, is_empty_query, parse_query

__all__ = [
    "Config",
    "RankerSettings",
    "get_config",
    "reload_config",
    "ConfigurationError",
    "ConfigParseError",
    "ConfigValidationError",
    "ParsedQuery",
    "QueryKind",
    "is_empty_query",
    "parse_query",
]
