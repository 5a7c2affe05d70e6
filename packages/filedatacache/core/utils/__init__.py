"""Shared utilities for filedatacache."""

from filedatacache.core.utils.logging import (
    StructuredJSONFormatter,
    configure_logging,
    configure_logging_from_config,
    get_logger,
)

__all__ = [
    "StructuredJSONFormatter",
    "configure_logging",
    "configure_logging_from_config",
    "get_logger",
]
