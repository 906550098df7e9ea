#!/usr/bin/env python3
"""
Central configuration module for list search.
Provides consistent search thresholds and field names across components.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .config_error import ConfigParseError, ConfigValidationError

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Config:
    """Central configuration management for list search.

    The ``logging`` section is not applied on load; hosts pass the loaded
    configuration to ``setup_logging_from_config`` to apply it.
    """

    # Queries shorter than this use the prefix-only filter
    SHORT_QUERY_LENGTH = 3
    # Fixed score given to every record kept by the prefix-only filter
    SHORT_QUERY_SCORE = 70
    # Free-text terms shorter than this are discarded
    MIN_TERM_LENGTH = 2

    # Record fields
    DEFAULT_SEARCHABLE_FIELDS = ["title", "description"]
    TITLE_FIELD = "title"
    TAGS_FIELD = "tags"

    DEFAULT_RANKING_POLICY = "default"

    # Logging configuration
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_JSON = os.getenv("LIST_SEARCH_LOG_JSON", "true").lower() == "true"
    LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    @classmethod
    def load_from_file(cls, config_path: Optional[str] = None) -> Dict[str, Any]:
        """Load configuration from YAML file.

        Args:
            config_path: Path to configuration file. Defaults to .listsearch.yaml

        Returns:
            Configuration dictionary merged over the defaults

        Raises:
            ConfigParseError: If the file cannot be read or parsed
            ConfigValidationError: If the merged configuration is invalid
        """
        if config_path is None:
            config_path = os.getenv("LIST_SEARCH_CONFIG", ".listsearch.yaml")

        config_file = Path(config_path)
        if not config_file.exists():
            return cls.get_defaults()

        try:
            with open(config_file, "r") as f:
                loaded = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigParseError(str(config_file), str(e)) from e

        if not isinstance(loaded, dict):
            raise ConfigParseError(str(config_file), "top-level value must be a mapping")

        config = cls._deep_merge(cls.get_defaults(), loaded)
        cls.validate_configuration(config)
        return config

    @classmethod
    def get_defaults(cls) -> Dict[str, Any]:
        """Get default configuration values.

        Returns:
            Default configuration dictionary
        """
        return {
            "search": {
                "short_query_length": cls.SHORT_QUERY_LENGTH,
                "short_query_score": cls.SHORT_QUERY_SCORE,
                "min_term_length": cls.MIN_TERM_LENGTH,
                "searchable_fields": list(cls.DEFAULT_SEARCHABLE_FIELDS),
                "title_field": cls.TITLE_FIELD,
                "tags_field": cls.TAGS_FIELD,
            },
            "ranking": {
                "default_policy": cls.DEFAULT_RANKING_POLICY,
            },
            "logging": {
                "level": cls.LOG_LEVEL,
                "json": cls.LOG_JSON,
                "format": cls.LOG_FORMAT,
            },
        }

    @staticmethod
    def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Deep merge two dictionaries, values in override winning."""
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = Config._deep_merge(result[key], value)
            else:
                result[key] = value
        return result

    @classmethod
    def validate_configuration(cls, config: Dict[str, Any]) -> bool:
        """Validate configuration values.

        Args:
            config: Configuration dictionary to validate

        Returns:
            True if valid

        Raises:
            ConfigValidationError: Listing every invalid key
        """
        problems: List[str] = []
        invalid: List[str] = []

        def reject(key: str, problem: str) -> None:
            invalid.append(key)
            problems.append(f"{key} {problem}")

        search = config.get("search", {})

        for key, minimum in (("short_query_length", 1), ("min_term_length", 1)):
            value = search.get(key)
            if not _is_int(value) or value < minimum:
                reject(f"search.{key}", f"must be an integer >= {minimum}")

        score = search.get("short_query_score")
        if not _is_int(score) or not 1 <= score <= 100:
            reject("search.short_query_score", "must be an integer between 1 and 100")

        fields = search.get("searchable_fields")
        if not isinstance(fields, list) or not all(isinstance(f, str) for f in fields):
            reject("search.searchable_fields", "must be a list of field names")

        for key in ("title_field", "tags_field"):
            value = search.get(key)
            if not isinstance(value, str) or not value:
                reject(f"search.{key}", "must be a non-empty string")

        policy = config.get("ranking", {}).get("default_policy")
        if not isinstance(policy, str) or not policy:
            reject("ranking.default_policy", "must be a non-empty string")

        level = config.get("logging", {}).get("level")
        if not isinstance(level, str) or level.upper() not in _LOG_LEVELS:
            reject("logging.level", f"must be one of {', '.join(_LOG_LEVELS)}")

        if invalid:
            raise ConfigValidationError(problems, invalid)
        return True


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class RankerSettings:
    """Thresholds and field names the record ranker works with."""

    short_query_length: int = Config.SHORT_QUERY_LENGTH
    short_query_score: int = Config.SHORT_QUERY_SCORE
    min_term_length: int = Config.MIN_TERM_LENGTH
    searchable_fields: List[str] = field(
        default_factory=lambda: list(Config.DEFAULT_SEARCHABLE_FIELDS)
    )
    title_field: str = Config.TITLE_FIELD
    tags_field: str = Config.TAGS_FIELD
    default_policy: str = Config.DEFAULT_RANKING_POLICY

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "RankerSettings":
        search = config.get("search", {})
        ranking = config.get("ranking", {})
        defaults = cls()
        return cls(
            short_query_length=search.get("short_query_length", defaults.short_query_length),
            short_query_score=search.get("short_query_score", defaults.short_query_score),
            min_term_length=search.get("min_term_length", defaults.min_term_length),
            searchable_fields=list(search.get("searchable_fields", defaults.searchable_fields)),
            title_field=search.get("title_field", defaults.title_field),
            tags_field=search.get("tags_field", defaults.tags_field),
            default_policy=ranking.get("default_policy", defaults.default_policy),
        )


# Singleton instance
_config_instance: Optional[Dict[str, Any]] = None


def get_config() -> Dict[str, Any]:
    """Get the global configuration instance.

    Returns:
        Configuration dictionary
    """
    global _config_instance
    if _config_instance is None:
        _config_instance = Config.load_from_file()
    return _config_instance


def reload_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """Reload configuration from file.

    Args:
        config_path: Optional path to configuration file

    Returns:
        New configuration dictionary
    """
    global _config_instance
    _config_instance = Config.load_from_file(config_path)
    return _config_instance
