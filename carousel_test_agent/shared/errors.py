"""Errors raised by the carousel generation stages.

Every error carries a human-readable message that is passed back to the
operator unchanged.
"""


class CarouselError(Exception):
    """Base class for all carousel generation failures."""


class ValidationError(CarouselError):
    """A required input is missing or blank; no API call was attempted."""


class EmptyPromptError(ValidationError):
    """The prompt template is empty or whitespace only."""


class ResponseShapeError(CarouselError):
    """The Gemini response is missing the candidates, parts or payload we need."""


class ImageStorageError(CarouselError):
    """Reading the reference image or writing a generated image failed."""
