"""
Shared utilities for list search: structured logging and timing helpers.
"""
