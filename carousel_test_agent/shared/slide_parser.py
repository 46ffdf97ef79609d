"""Extraction of slide records from freeform model output.

The content model is asked for text shaped like:

    Slide 1
    Heading: Cats
    Explanation: Cats are independent animals.

    Slide 2
    **Heading:** Dogs
    **Explanation:** Dogs are loyal.

but the exact layout varies from run to run, so parsing is deliberately
permissive: blocks that don't yield both a heading and an explanation are
dropped instead of raising.

Note: a literal "Slide 3" inside an explanation starts a new block.
"""

import logging
import re
from typing import List

from .models import SlideContent

_SLIDE_MARKER_RE = re.compile(r"Slide\s+(\d+)", re.IGNORECASE)

# Tried in order: heading ended by a blank line or a same-line Explanation label,
# then the rest of the heading line.
_HEADING_PATTERNS = (
    re.compile(r"Heading:\s*([^\n]+?)(?:\n\s*\n|Explanation:)", re.IGNORECASE),
    re.compile(r"Heading:\s*([^\n]+)", re.IGNORECASE),
)

_EXPLANATION_RE = re.compile(r"Explanation:\s*(.+)", re.IGNORECASE | re.DOTALL)

# A blank-line separated "Slide..." run that leaked into the end of an explanation
_TRAILING_SLIDE_RE = re.compile(r"\n\s*\n\s*Slide.*\Z", re.IGNORECASE | re.DOTALL)


def _strip_emphasis(text: str) -> str:
    return text.replace("**", "").replace("__", "").strip()


def _extract_heading(block: str) -> str:
    for pattern in _HEADING_PATTERNS:
        match = pattern.search(block)
        if match:
            return _strip_emphasis(match.group(1))
    return ""


def _extract_explanation(block: str) -> str:
    match = _EXPLANATION_RE.search(block)
    if not match:
        return ""
    explanation = _TRAILING_SLIDE_RE.sub("", match.group(1).strip())
    return _strip_emphasis(explanation)


def parse_slide_content(text: str) -> List[SlideContent]:
    """Parse generated text into slide records, in source order.

    Args:
        text: Raw text returned by the content model

    Returns:
        List of SlideContent. Empty when no "Slide <n>" markers are found.
    """
    slides: List[SlideContent] = []
    pieces = _SLIDE_MARKER_RE.split(text or "")

    # pieces = [preamble, number, block, number, block, ...]
    for i in range(1, len(pieces), 2):
        try:
            slide_number = int(pieces[i])
        except ValueError:
            # digit run past the interpreter's int conversion limit
            logging.debug(f"Skipping slide block with an unparseable number ({len(pieces[i])} digits)")
            continue
        block = pieces[i + 1] if i + 1 < len(pieces) else ""

        heading = _extract_heading(block)
        explanation = _extract_explanation(block)

        if not heading or not explanation or slide_number < 1:
            logging.debug(f"Skipping slide block {slide_number}: missing heading or explanation")
            continue

        slides.append(SlideContent(slide_number=slide_number, heading=heading, explanation=explanation))

    return slides
