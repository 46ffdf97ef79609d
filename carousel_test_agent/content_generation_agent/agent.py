"""
content_generation_agent

Defines the sub-agent that turns a pasted transcript into slide content using
the operator's content prompt.

State outputs written by this module:
- slides: list of {"slideNumber", "heading", "explanation"} dicts
- raw_content_response: raw model text behind the parsed slides
- reference_image_url, reference_slide_index, generation_results: reset to None
  whenever the slides are replaced
"""

# Google ADK Imports
from google.adk.agents.llm_agent import Agent
from google.adk.tools import ToolContext

# Shared Imports
from ..shared.constants import AGENT_MODEL, get_gemini_client
from ..shared.models import SlideList
from ..shared.tools import STAGE_ERRORS, error_result, list_current_state, replace_slides, _maybe_extract_json
from .content_gen import generate_content

# Utilities
import logging
from typing import Any, Dict
from pydantic import ValidationError


CONTENT_GENERATION_PROMPT = """**Role:** Slide Content Generation Agent

**Primary Objective:**
Help a developer test content-generation prompts. You take a transcript and a content prompt from the user, run them through the content model, and show the slides that were parsed out of the response.

**Workflow Overview:**
1. **Collect Inputs**: Ask the user for the content prompt and the transcript. The prompt may contain a `{transcript}` placeholder; pass both exactly as given, do NOT edit the prompt.
2. **Generate**: Call `generate_slide_content` with the prompt and transcript.
3. **Report**: Show every parsed slide (number, heading, explanation). If fewer slides were parsed than expected, show the `raw_text` so the user can adjust the prompt.
4. **Manual Edits**: If the user wants to change or paste slides themselves, use `commit_slides` with a JSON object of the form {"slides": [{"slideNumber": 1, "heading": "...", "explanation": "..."}]}.
5. **Handoff**: Once the user is happy with the slides, transfer back to the root agent so images can be generated.

**Error Handling:**
- If a tool returns status "error", show the message to the user and ask how they want to proceed.
"""


def generate_slide_content(prompt: str, transcript: str, tool_context: ToolContext) -> Dict[str, Any]:
    """Generate slide content from a transcript and save the parsed slides to state.

    Args:
        prompt: The content generation prompt; `{transcript}` is replaced by the transcript
        transcript: The transcript text to turn into slides
        tool_context: ADK ToolContext automatically injected at runtime for state management

    Returns:
        Dict with status "success", the parsed slides and the raw text, or status "error" and a message.
    """
    try:
        result = generate_content(get_gemini_client(), prompt, transcript)
    except STAGE_ERRORS as e:
        return error_result("generate content", e)

    payload = result.model_dump(by_alias=True)
    replace_slides(tool_context, payload["slides"])
    tool_context.state["raw_content_response"] = payload["rawText"]

    return {
        "status": "success",
        "slide_count": len(payload["slides"]),
        **payload,
    }


def commit_slides(json_str: str, tool_context: ToolContext) -> Dict[str, Any]:
    """Replace the slides in session state with slides supplied by the user.

    **Input Format:** json_str must conform to the SlideList schema:
    {
      "slides": [
        {"slideNumber": 1, "heading": "A heading", "explanation": "The slide explanation."},
        ...
      ]
    }
    do NOT include any preamble, such as ```json ``` or explanations - ONLY provide the JSON object.

    Args:
        json_str: The slides as a str, conforming to the SlideList schema above.
        tool_context: ADK ToolContext automatically injected at runtime for state management

    Returns:
        Dict containing a status (str): "success" or "error", and the committed slides
    """
    candidate_json = _maybe_extract_json(json_str)
    try:
        slide_list = SlideList.model_validate_json(candidate_json)
    except ValidationError as e:
        return {
            "status": "error",
            "message": f"Provided JSON does not conform to SlideList schema: {e}"
        }

    slides = slide_list.model_dump(by_alias=True)["slides"]
    replace_slides(tool_context, slides)
    return {
        "status": "success",
        "message": f"Committed {len(slides)} slides to state.",
        "slides": slides,
    }


content_generation_agent = None

try:
    content_generation_agent = Agent(
        model=AGENT_MODEL,
        name="content_generation_agent",
        description="Generates slide content (heading + explanation pairs) from a transcript using a user-supplied prompt.",
        instruction=CONTENT_GENERATION_PROMPT,
        tools=[list_current_state, generate_slide_content, commit_slides],
    )
    logging.info(f"✅ Sub-agent '{content_generation_agent.name}' created using model '{AGENT_MODEL}'.")
except Exception as e:
    logging.error(f"❌ Failed to create sub-agent 'content_generation_agent': {e}")
