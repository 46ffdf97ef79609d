"""Normalization of Gemini `generate_content` responses.

Every response coming back from the Gemini client passes through exactly one of
the two functions below before anything else looks at it:

    normalize_text_response(response)  -> GeneratedText
    normalize_image_response(response) -> GeneratedImage

Known response shapes each have an explicit constructor; anything else raises
ResponseShapeError with a readable message instead of falling back to dumping
the raw response.
"""

import base64
import binascii
from typing import Any, List, Optional, Sequence

from pydantic import BaseModel, ConfigDict

from .errors import ResponseShapeError
from .models import TokenUsage


class GeneratedText(BaseModel):
    """Plain text produced by a text-mode call."""
    model_config = ConfigDict(frozen=True)

    text: str
    token_usage: TokenUsage = TokenUsage()

    @classmethod
    def from_text(cls, text: str, token_usage: Optional[TokenUsage] = None) -> "GeneratedText":
        """Shape 1: the response exposes its text directly."""
        return cls(text=text, token_usage=token_usage or TokenUsage())

    @classmethod
    def from_parts(cls, parts: Sequence[Any], token_usage: Optional[TokenUsage] = None) -> "GeneratedText":
        """Shape 2: a list of content parts whose text is concatenated (thought parts skipped)."""
        text = "".join(
            getattr(part, "text", None) or ""
            for part in parts
            if not getattr(part, "thought", None)
        )
        return cls(text=text, token_usage=token_usage or TokenUsage())


class GeneratedImage(BaseModel):
    """Decoded image payload produced by an image-mode call."""
    model_config = ConfigDict(frozen=True)

    data: bytes
    mime_type: str
    token_usage: TokenUsage = TokenUsage()

    @classmethod
    def from_inline_data(cls, inline_data: Any, token_usage: Optional[TokenUsage] = None) -> "GeneratedImage":
        """Build from a part's `inline_data` blob.

        The Python SDK returns `inline_data.data` as bytes; a base64 string is
        accepted too (e.g. when the response was rebuilt from JSON).
        """
        data = inline_data.data
        if isinstance(data, str):
            try:
                data = base64.b64decode(data, validate=True)
            except (binascii.Error, ValueError) as e:
                raise ResponseShapeError(f"Image data is not valid base64: {e}") from e
        return cls(data=bytes(data), mime_type=inline_data.mime_type, token_usage=token_usage or TokenUsage())


def _usage(response: Any) -> TokenUsage:
    return TokenUsage.from_usage_metadata(getattr(response, "usage_metadata", None))


def _first_candidate_parts(response: Any) -> Optional[List[Any]]:
    candidates = getattr(response, "candidates", None)
    if not candidates:
        return None
    content = getattr(candidates[0], "content", None)
    return list(getattr(content, "parts", None) or [])


def normalize_text_response(response: Any) -> GeneratedText:
    """Turn a text-mode response into GeneratedText.

    Raises:
        ResponseShapeError: If the response carries no text in any known shape.
    """
    usage = _usage(response)

    text = getattr(response, "text", None)
    if isinstance(text, str):
        return GeneratedText.from_text(text, usage)

    parts = _first_candidate_parts(response)
    if parts and any(isinstance(getattr(part, "text", None), str) for part in parts):
        return GeneratedText.from_parts(parts, usage)

    raise ResponseShapeError("No text content in response")


def normalize_image_response(response: Any) -> GeneratedImage:
    """Return the first image payload of the first candidate.

    Parts flagged as `thought` are internal reasoning and never carry the final
    image, so they are skipped.

    Raises:
        ResponseShapeError: If there are no candidates, no content parts, or no image part.
    """
    candidates = getattr(response, "candidates", None)
    if not candidates:
        raise ResponseShapeError("No candidates in response")

    parts = _first_candidate_parts(response)
    if not parts:
        raise ResponseShapeError("No content parts in response")

    for part in parts:
        if getattr(part, "thought", None):
            continue
        inline_data = getattr(part, "inline_data", None)
        if inline_data is None or not inline_data.data:
            continue
        if "image" in (inline_data.mime_type or ""):
            return GeneratedImage.from_inline_data(inline_data, _usage(response))

    raise ResponseShapeError("No image data found in response")
