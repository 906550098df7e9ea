#!/usr/bin/env python3
"""
config_error.py: Configuration errors for list search

Raised while loading or validating the search configuration so callers can
tell an unreadable config file from a config holding bad values. Scoring
itself never raises these.
"""

from typing import Any, Dict, List, Optional


class ConfigurationError(Exception):
    """Base exception for configuration-related errors."""

    def __init__(self, message: str, config_path: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        self.config_path = config_path
        self.details = details or {}
        super().__init__(message)


class ConfigParseError(ConfigurationError):
    """The YAML configuration file exists but cannot be read or parsed."""

    def __init__(self, config_path: str, parse_error: str):
        super().__init__(
            f"Failed to parse configuration file {config_path}: {parse_error}",
            config_path=config_path,
            details={"parse_error": parse_error},
        )


class ConfigValidationError(ConfigurationError):
    """One or more configuration values are out of range or of the wrong type."""

    def __init__(self, problems: List[str], invalid_fields: List[str]):
        self.problems = problems
        self.invalid_fields = invalid_fields
        super().__init__(
            "Invalid search configuration: " + "; ".join(problems),
            details={"invalid_fields": invalid_fields},
        )
