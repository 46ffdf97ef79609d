"""Shared utilities for the Carousel Test Agent system.

This package contains the pieces used by every stage of the carousel prompt
testing workflow, independent of the ADK agents that expose them.

Modules:
    - constants.py: Configuration values loaded from the environment
    - errors.py: Error taxonomy raised by the generation stages
    - models.py: Pydantic models for slides, token usage and stage results
    - templating.py: Prompt placeholder substitution and prompt guards
    - slide_parser.py: Extraction of slide records from freeform model text
    - responses.py: Normalization of Gemini responses into text or image payloads
    - storage.py: Writing generated images under uploads/carousel
    - tools.py: Common ADK tool functions for state inspection
"""
