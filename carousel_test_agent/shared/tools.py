"""Shared tool functions for ADK state management.

These tools are available to every agent in the carousel workflow and give the
operator a standard way to inspect what has been generated so far, plus the
helpers tool wrappers use to report results back to the agent.
"""

import logging
import re
from typing import Any, Dict

from google.adk.tools import ToolContext
from google.genai import errors as genai_errors
import httpx

from .errors import CarouselError

# Errors a stage can raise that are reported back to the operator as tool errors
# (httpx errors are the SDK's transport failures: timeouts, dropped connections)
STAGE_ERRORS = (CarouselError, genai_errors.APIError, httpx.HTTPError)


def list_current_state(tool_context: ToolContext) -> Dict[str, Any]:
    """List the entire current session state.

    Returns every key-value pair in the ADK state: the parsed slides, the raw
    content response, the reference image URL and any image results.

    Args:
        tool_context: ADK ToolContext for accessing the session state

    Returns:
        Dictionary containing:
            - status (str): Always "success"
            - [all state keys]: All state data as key-value pairs
    """
    current_state = tool_context.state.to_dict()
    return {
        "status": "success",
        **current_state
    }


def error_result(action: str, error: Exception) -> Dict[str, Any]:
    """Log a failed stage and build the tool's error payload."""
    logging.error(f"❌ Error {action}: {error}")
    return {
        "status": "error",
        "error": f"Failed to {action}",
        "message": str(error) or type(error).__name__,
    }


# Regex pattern for extracting JSON from markdown code fences
_JSON_FENCE_RE = re.compile(r"```(?:json)?\s*(\{.*?\})\s*```", re.DOTALL)


def _maybe_extract_json(text: str) -> str:
    """Extract a JSON object from text that may be wrapped in ```json fences.

    Returns the fenced block when present, otherwise the stripped input (the
    caller's JSON validation reports anything that still isn't JSON).
    """
    text = (text or "").strip()
    if not text:
        return text

    m = _JSON_FENCE_RE.search(text)
    if m:
        return m.group(1).strip()

    return text


# Keys derived from a particular set of slides; stale once the slides change
_SLIDE_DERIVED_KEYS = ("reference_image_url", "reference_slide_index", "generation_results")


def replace_slides(tool_context: ToolContext, slides) -> None:
    """Store a new set of slides and drop images generated for the previous set."""
    tool_context.state["slides"] = slides
    for key in _SLIDE_DERIVED_KEYS:
        if key in tool_context.state:
            tool_context.state[key] = None
