"""Prompt templating for the carousel generation stages.

Prompts are written by the operator with `{name}` placeholders such as
`{transcript}`, `{heading}` and `{explanation}`. Substitution happens in a
single pass over the template, so a replacement value that itself contains
`{heading}` is inserted literally and never substituted again.
"""

import re
from typing import Mapping

from .errors import EmptyPromptError

IMAGE_INSTRUCTION_PREFIX = "Generate an image: "

# Any one of these tells the image model it is being asked for an image
_IMAGE_INSTRUCTION_WORDS = ("generate", "create", "image")


def substitute_placeholders(template: str, values: Mapping[str, str]) -> str:
    """Replace every `{name}` in `template` with `values[name]`.

    Matching is case-sensitive and global. Placeholders with no entry in
    `values` are left verbatim.

    Args:
        template: Operator-supplied prompt text
        values: Mapping of placeholder name to replacement text

    Returns:
        The substituted prompt.

    Raises:
        EmptyPromptError: If the template is empty or whitespace only.
    """
    if not template or not template.strip():
        raise EmptyPromptError("Prompt is required. Please provide a prompt before generating.")
    if not values:
        return template

    pattern = re.compile(r"\{(" + "|".join(re.escape(name) for name in values) + r")\}")
    return pattern.sub(lambda m: values[m.group(1)], template)


def ensure_image_instruction(prompt: str) -> str:
    """Prefix an explicit image instruction when the prompt doesn't ask for one."""
    lowered = prompt.lower()
    if any(word in lowered for word in _IMAGE_INSTRUCTION_WORDS):
        return prompt
    return f"{IMAGE_INSTRUCTION_PREFIX}{prompt}"


def render_image_prompt(template: str, heading: str, explanation: str) -> str:
    """Fill `{heading}`/`{explanation}` and apply the image-instruction guard."""
    prompt = substitute_placeholders(template, {"heading": heading, "explanation": explanation})
    return ensure_image_instruction(prompt)
