"""Utility functions for Stradl MCP."""

from stradl_mcp.utils.clock import format_timestamp, parse_timestamp, utc_now
from stradl_mcp.utils.formatters import (
    _format_blocker,
    _format_task_concise,
    _format_task_markdown,
    _format_tasks_concise,
    _format_tasks_markdown,
)
from stradl_mcp.utils.storage import JsonStore, get_store, legacy_data_files

__all__ = [
    "utc_now",
    "format_timestamp",
    "parse_timestamp",
    "JsonStore",
    "get_store",
    "legacy_data_files",
    "_format_blocker",
    "_format_task_concise",
    "_format_task_markdown",
    "_format_tasks_concise",
    "_format_tasks_markdown",
]
