"""Shared utilities for tmpl."""

from ._logging import LogFormatType, create_cli_logger, create_null_logger

__all__ = [
    "LogFormatType",
    "create_cli_logger",
    "create_null_logger",
]
