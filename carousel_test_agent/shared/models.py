"""Pydantic models shared across the generation stages.

All models are frozen and use camelCase aliases so that `model_dump(by_alias=True)`
produces the JSON shape the prompt-testing UI expects, e.g.:

    {"slideNumber": 1, "heading": "Cats", "explanation": "Independent."}

Field names are accepted as well as aliases when validating input.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt, PositiveInt


class _FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class SlideContent(_FrozenModel):
    """A single slide extracted from generated text."""
    slide_number: PositiveInt = Field(alias="slideNumber", description="Slide number as written by the model")
    heading: str = Field(min_length=1, description="Slide heading with emphasis markers stripped")
    explanation: str = Field(min_length=1, description="Slide body text with emphasis markers stripped")


class SlideList(_FrozenModel):
    """A list of slides, used when the operator commits slides by hand."""
    slides: List[SlideContent]


class TokenUsage(_FrozenModel):
    """Token counts reported by the Gemini API (0 when not reported)."""
    input: NonNegativeInt = 0
    output: NonNegativeInt = 0
    total: NonNegativeInt = 0

    @classmethod
    def from_usage_metadata(cls, usage_metadata) -> "TokenUsage":
        if usage_metadata is None:
            return cls()
        return cls(
            input=getattr(usage_metadata, "prompt_token_count", None) or 0,
            output=getattr(usage_metadata, "candidates_token_count", None) or 0,
            total=getattr(usage_metadata, "total_token_count", None) or 0,
        )


class GenerationResult(_FrozenModel):
    """Outcome of generating the image for one slide in the remaining-images stage."""
    slide_number: int = Field(alias="slideNumber")
    image_url: Optional[str] = Field(default=None, alias="imageUrl")
    status: Literal["completed", "failed"]
    token_usage: Optional[TokenUsage] = Field(default=None, alias="tokenUsage")
    error: Optional[str] = None


class ContentGenerationResult(_FrozenModel):
    slides: List[SlideContent]
    raw_text: str = Field(alias="rawText")


class FirstImageResult(_FrozenModel):
    image_url: str = Field(alias="imageUrl")
    slide_number: int = Field(alias="slideNumber")
    token_usage: TokenUsage = Field(alias="tokenUsage")


class RemainingImagesResult(_FrozenModel):
    results: List[GenerationResult]

    @property
    def completed(self) -> List[GenerationResult]:
        return [r for r in self.results if r.status == "completed"]

    @property
    def failed(self) -> List[GenerationResult]:
        return [r for r in self.results if r.status == "failed"]
