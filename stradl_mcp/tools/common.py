"""Load-mutate-persist plumbing shared by the MCP tools."""

import logging
from collections.abc import Callable
from datetime import datetime
from typing import TypeVar

from stradl_mcp.engine.ranking import refresh
from stradl_mcp.errors import NotFoundError, StradlError
from stradl_mcp.models.task import AppData
from stradl_mcp.utils.clock import utc_now
from stradl_mcp.utils.storage import get_store

logger = logging.getLogger(__name__)

T = TypeVar("T")

_NOT_FOUND_TIPS = {
    "task": "Use stradl_list to find valid task IDs (try view='archive' or view='completed' too).",
    "blocker": "Use stradl_blockers with the task ID to list its blockers.",
}


def _format_engine_error(error: StradlError) -> str:
    if isinstance(error, NotFoundError):
        tip = _NOT_FOUND_TIPS.get(error.kind, "")
        return f"Error: {error}.\nTip: {tip}" if tip else f"Error: {error}."
    return f"Error: {error}"


def _format_storage_error(error: Exception) -> str:
    return (
        f"Error: Failed to access task data - {type(error).__name__}: {error}\n"
        f"Tip: Check that STRADL_DATA_FILE points to a readable, valid JSON file."
    )


def _run_command(action: Callable[[AppData, datetime], T]) -> tuple[bool, T | str]:
    """
    Run a mutation against the stored snapshot and persist it.

    Blockers and focus are brought up to date before ``action`` runs, so
    eligibility checks see auto-resolved state.

    Args:
        action: Called with (snapshot, now); its return value is passed through

    Returns:
        Tuple of (success: bool, result | error message)
    """
    store = get_store()
    now = utc_now()
    try:
        with store.lock:
            data = store.load()
            refresh(data, now)
            result = action(data, now)
            store.save(data)
        return True, result
    except StradlError as e:
        logger.info("Command rejected: %s", e)
        return False, _format_engine_error(e)
    except (OSError, ValueError) as e:
        return False, _format_storage_error(e)


def _run_query(action: Callable[[AppData, datetime], tuple[T, bool]]) -> tuple[bool, T | str]:
    """
    Run a read against the stored snapshot.

    ``action`` returns (result, changed); the snapshot is saved only when the
    pre-read passes changed something.

    Returns:
        Tuple of (success: bool, result | error message)
    """
    store = get_store()
    now = utc_now()
    try:
        with store.lock:
            data = store.load()
            result, changed = action(data, now)
            if changed:
                store.save(data)
        return True, result
    except StradlError as e:
        return False, _format_engine_error(e)
    except (OSError, ValueError) as e:
        return False, _format_storage_error(e)
