"""Gemini image generation for carousel slides.

Two stages live here:

    generate_first_image: one slide, text prompt only. The saved image becomes
        the style reference for the rest of the carousel.
    generate_remaining_images: every other slide, prompt plus the reference
        image, one call at a time. A failing slide is recorded as failed and
        the loop moves on.

Both stages ask for IMAGE output only, using the square 2K image config.
"""

import logging
import mimetypes
from typing import Iterable, List, Union

from google import genai
from google.genai.types import Blob, GenerateContentConfig, ImageConfig, Part

from ..shared.constants import IMAGE_ASPECT_RATIO, IMAGE_MODEL, IMAGE_SIZE
from ..shared.errors import ValidationError
from ..shared.models import FirstImageResult, GenerationResult, RemainingImagesResult, SlideContent
from ..shared.responses import normalize_image_response
from ..shared.storage import ImageStore
from ..shared.templating import render_image_prompt

IMAGE_GEN_CONFIG = GenerateContentConfig(
    response_modalities=["IMAGE"],  # Only request IMAGE, not TEXT
    image_config=ImageConfig(
        aspect_ratio=IMAGE_ASPECT_RATIO,
        image_size=IMAGE_SIZE,
    ),
)


def generate_first_image(
    client: genai.Client,
    store: ImageStore,
    prompt_template: str,
    heading: str,
    explanation: str,
    slide_number: int,
    total_slides: int,
    model: str = IMAGE_MODEL,
) -> FirstImageResult:
    """Generate the first slide image, with no reference image.

    Args:
        client: Initialized Google Gemini client
        store: Where the generated image is written
        prompt_template: Image prompt with `{heading}`/`{explanation}` placeholders
        heading: Heading of the slide being illustrated
        explanation: Explanation of the slide being illustrated
        slide_number: Number of the slide, used in the filename
        total_slides: Size of the carousel (informational)
        model: Gemini image model identifier

    Returns:
        FirstImageResult with the image URL and token usage.

    Raises:
        ValidationError: If heading or explanation is blank.
        EmptyPromptError: If the prompt template is blank.
        ResponseShapeError: If the response carries no image.
        ImageStorageError: If the image cannot be written.
    """
    if not heading or not heading.strip() or not explanation or not explanation.strip():
        raise ValidationError("Heading and explanation are required")

    final_prompt = render_image_prompt(prompt_template, heading, explanation)
    logging.info(f"🎨 Generating first image (slide {slide_number}/{total_slides}) with prompt: {final_prompt[:300]}")

    response = client.models.generate_content(
        model=model,
        contents=final_prompt,
        config=IMAGE_GEN_CONFIG,
    )
    image = normalize_image_response(response)

    image_url = store.save_image(slide_number, image.data)
    logging.info(f"✅ First image generated: {image_url}")

    return FirstImageResult(image_url=image_url, slide_number=slide_number, token_usage=image.token_usage)


def _generate_slide_image(
    client: genai.Client,
    store: ImageStore,
    prompt_template: str,
    slide: SlideContent,
    reference_part: Part,
    model: str,
) -> GenerationResult:
    final_prompt = render_image_prompt(prompt_template, slide.heading, slide.explanation)

    response = client.models.generate_content(
        model=model,
        contents=[Part(text=final_prompt), reference_part],
        config=IMAGE_GEN_CONFIG,
    )
    image = normalize_image_response(response)

    image_url = store.save_image(slide.slide_number, image.data)
    return GenerationResult(
        slide_number=slide.slide_number,
        image_url=image_url,
        status="completed",
        token_usage=image.token_usage,
    )


def generate_remaining_images(
    client: genai.Client,
    store: ImageStore,
    prompt_template: str,
    slides: Iterable[Union[SlideContent, dict]],
    reference_image_url: str,
    model: str = IMAGE_MODEL,
) -> RemainingImagesResult:
    """Generate one image per slide, conditioned on the reference image.

    Slides are processed sequentially in input order. Failures of a single
    slide (blank prompt, API or network error, missing image, write failure) are recorded
    as a failed GenerationResult and do not stop the loop.

    Args:
        client: Initialized Google Gemini client
        store: Where generated images are written and the reference is read from
        prompt_template: Image prompt with `{heading}`/`{explanation}` placeholders
        slides: Slides to illustrate (SlideContent or equivalent dicts)
        reference_image_url: URL or path of the first generated image
        model: Gemini image model identifier

    Returns:
        RemainingImagesResult with one GenerationResult per slide.

    Raises:
        ValidationError: If there are no slides or the reference image is missing.
        ImageStorageError: If the reference image cannot be read.
    """
    slides = [
        s if isinstance(s, SlideContent) else SlideContent.model_validate(s)
        for s in (slides or [])
    ]
    if not slides:
        raise ValidationError("Slides are required")
    if not reference_image_url:
        raise ValidationError("First image URL is required")
    if not store.exists(reference_image_url):
        raise ValidationError("Reference image not found")

    # Read the reference once and reuse the same part for every slide
    reference_path = store.resolve(reference_image_url)
    mime_type = mimetypes.guess_type(reference_path.name)[0] or "image/png"
    reference_part = Part(inline_data=Blob(mime_type=mime_type, data=store.read_image(reference_image_url)))

    logging.info(f"🎨 Generating {len(slides)} images with reference {reference_image_url}")

    results: List[GenerationResult] = []
    for slide in slides:
        logging.info(f"🎨 Generating slide {slide.slide_number}/{len(slides)}")
        try:
            result = _generate_slide_image(client, store, prompt_template, slide, reference_part, model)
            logging.info(f"✅ Generated slide {slide.slide_number}")
        except Exception as e:
            logging.error(f"❌ Failed to generate slide {slide.slide_number}: {e}")
            result = GenerationResult(
                slide_number=slide.slide_number,
                status="failed",
                error=str(e) or type(e).__name__,
            )
        results.append(result)

    return RemainingImagesResult(results=results)
