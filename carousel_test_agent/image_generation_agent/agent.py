"""
image_generation_agent

Defines the sub-agent that generates slide images for the parsed slides: first
a reference image for one slide, then the remaining slides conditioned on that
reference.

Expected state inputs (written by upstream agents/tools):
- slides: list of {"slideNumber", "heading", "explanation"} dicts

State outputs written by this module:
- reference_image_url: URL of the first generated image
- reference_slide_index: index into `slides` of the slide the reference was made for
- generation_results: list of per-slide results from the remaining-images stage
"""

# Google ADK Imports
from google.adk.agents.llm_agent import Agent
from google.adk.tools import ToolContext

# Shared Imports
from ..shared.constants import AGENT_MODEL, UPLOADS_DIR, get_gemini_client
from ..shared.models import SlideContent
from ..shared.storage import ImageStore
from ..shared.tools import STAGE_ERRORS, error_result, list_current_state
from .image_gen import generate_first_image, generate_remaining_images

# Utilities
import logging
from typing import Any, Dict
import pydantic


IMAGE_GENERATION_PROMPT = """**Role:** Slide Image Generation Agent

**Primary Objective:**
Help a developer test image-generation prompts for a carousel of slides. The slides are already in state (`slides`). You generate one reference image first, then the rest of the slides using that image as a style reference.

**Workflow Overview:**
1. **Check Slides**: Use `list_current_state` to confirm there are slides. If there are none, transfer back to the root agent so content can be generated first.
2. **First Image**: Ask the user for the first image prompt (it may contain `{heading}` and `{explanation}` placeholders) and which slide to use (default: the first). Call `generate_first_slide_image` with the prompt exactly as given.
3. **Review**: Show the user the image URL and token usage, and ask whether to regenerate or continue.
4. **Remaining Images**: Ask for the remaining images prompt and call `generate_remaining_slide_images`. Leave `reference_image_url` empty to use the image from step 2.
5. **Report**: List every slide with its status and image URL or error. Failed slides can be retried by calling the tool again.

**Error Handling:**
- If a tool returns status "error", show the message to the user and ask how they want to proceed.
"""


def get_image_store() -> ImageStore:
    return ImageStore(UPLOADS_DIR)


def _load_slides(tool_context: ToolContext):
    return [SlideContent.model_validate(s) for s in tool_context.state.get("slides") or []]


def generate_first_slide_image(prompt: str, tool_context: ToolContext, slide_index: int = 0) -> Dict[str, Any]:
    """Generate the reference image for one of the slides in state.

    Args:
        prompt: The first image prompt; `{heading}` and `{explanation}` are replaced with the slide's values
        tool_context: ADK ToolContext automatically injected at runtime for state management
        slide_index: Position of the slide in state['slides'] to illustrate (default 0)

    Returns:
        Dict with status "success", imageUrl, slideNumber and tokenUsage, or status "error" and a message.
    """
    try:
        slides = _load_slides(tool_context)
    except pydantic.ValidationError as e:
        return error_result("generate first image", e)

    if not slides:
        return {
            "status": "error",
            "message": "Missing slides - return to content_generation_agent to generate them"
        }
    if not 0 <= slide_index < len(slides):
        return {
            "status": "error",
            "message": f"slide_index {slide_index} is out of range for {len(slides)} slides"
        }

    slide = slides[slide_index]
    try:
        result = generate_first_image(
            get_gemini_client(),
            get_image_store(),
            prompt,
            slide.heading,
            slide.explanation,
            slide.slide_number,
            len(slides),
        )
    except STAGE_ERRORS as e:
        return error_result("generate first image", e)

    tool_context.state["reference_image_url"] = result.image_url
    tool_context.state["reference_slide_index"] = slide_index

    return {
        "status": "success",
        **result.model_dump(by_alias=True),
    }


def generate_remaining_slide_images(prompt: str, tool_context: ToolContext, reference_image_url: str = "") -> Dict[str, Any]:
    """Generate images for the remaining slides using the reference image for style.

    When reference_image_url is empty, the image from `generate_first_slide_image`
    is used and its slide is skipped. When a different reference is given, every
    slide in state is generated.

    Args:
        prompt: The remaining images prompt; `{heading}` and `{explanation}` are replaced per slide
        tool_context: ADK ToolContext automatically injected at runtime for state management
        reference_image_url: Optional URL or path of the reference image

    Returns:
        Dict with status "success" and one result per slide (each "completed" or "failed"),
        or status "error" and a message when the slides or reference image are missing.
    """
    try:
        slides = _load_slides(tool_context)
    except pydantic.ValidationError as e:
        return error_result("generate remaining images", e)

    if not reference_image_url:
        reference_image_url = tool_context.state.get("reference_image_url", "")
        reference_index = tool_context.state.get("reference_slide_index")
        slides = [s for i, s in enumerate(slides) if i != reference_index]

    try:
        result = generate_remaining_images(
            get_gemini_client(),
            get_image_store(),
            prompt,
            slides,
            reference_image_url,
        )
    except STAGE_ERRORS as e:
        return error_result("generate remaining images", e)

    payload = result.model_dump(by_alias=True)
    tool_context.state["generation_results"] = payload["results"]

    return {
        "status": "success",
        "completed": len(result.completed),
        "failed": len(result.failed),
        **payload,
    }


image_generation_agent = None

try:
    image_generation_agent = Agent(
        model=AGENT_MODEL,
        name="image_generation_agent",
        description="Generates a reference image for one slide, then images for the remaining slides using that reference.",
        instruction=IMAGE_GENERATION_PROMPT,
        tools=[list_current_state, generate_first_slide_image, generate_remaining_slide_images],
    )
    logging.info(f"✅ Sub-agent '{image_generation_agent.name}' created using model '{AGENT_MODEL}'.")
except Exception as e:
    logging.error(f"❌ Failed to create sub-agent 'image_generation_agent': {e}")
