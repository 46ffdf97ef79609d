"""Slide content generation from a transcript (stage one of the carousel flow).

The operator's content prompt gets the transcript substituted for
`{transcript}`, is sent once to the Gemini text model, and the returned text is
parsed into slide records. The raw text is returned too, so the operator can
see why a block didn't parse.
"""

import logging

from google import genai

from ..shared.constants import CONTENT_MODEL
from ..shared.errors import ValidationError
from ..shared.models import ContentGenerationResult
from ..shared.responses import normalize_text_response
from ..shared.slide_parser import parse_slide_content
from ..shared.templating import substitute_placeholders


def generate_content(
    client: genai.Client,
    prompt_template: str,
    transcript: str,
    model: str = CONTENT_MODEL,
) -> ContentGenerationResult:
    """Generate slide content for a transcript.

    Args:
        client: Initialized Google Gemini client
        prompt_template: Content prompt, usually containing `{transcript}`
        transcript: Transcript text pasted by the operator
        model: Gemini text model identifier

    Returns:
        ContentGenerationResult with the parsed slides and the raw response text.

    Raises:
        ValidationError: If the transcript is blank.
        EmptyPromptError: If the prompt template is blank.
        ResponseShapeError: If the response carries no text.
    """
    if not transcript or not transcript.strip():
        raise ValidationError("Transcript is required")

    final_prompt = substitute_placeholders(prompt_template, {"transcript": transcript})
    logging.info(f"📝 Generating content with prompt: {final_prompt[:200]}")

    response = client.models.generate_content(
        model=model,
        contents=final_prompt,
    )

    generated = normalize_text_response(response)
    logging.info(f"📄 Raw response length: {len(generated.text)}")

    slides = parse_slide_content(generated.text)
    logging.info(f"✅ Parsed {len(slides)} slides")

    return ContentGenerationResult(slides=slides, raw_text=generated.text)
