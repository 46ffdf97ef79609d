"""Shared configuration constants and the Gemini client factory.

Values are read from environment variables (a local .env file is loaded first)
so the same code can point at other models or output directories while
iterating on prompts.

Constants:
    AGENT_MODEL: Model identifier driving the ADK agents themselves
    CONTENT_MODEL: Text model used to turn a transcript into slide content
    IMAGE_MODEL: Image model used for the first and remaining slide images
    IMAGE_ASPECT_RATIO / IMAGE_SIZE: Image configuration sent with every image call
    GOOGLE_API_KEY: Google AI API key loaded from environment variables
    UPLOADS_DIR: Root directory that generated images are written under
"""

from functools import lru_cache
from pathlib import Path
import os

from google import genai
from dotenv import load_dotenv

load_dotenv()

# Model driving the orchestrator/sub-agents (Flash variant for speed/cost balance)
AGENT_MODEL = os.getenv("CAROUSEL_AGENT_MODEL", "gemini-2.5-flash")

# Models exercised by the generation stages
CONTENT_MODEL = os.getenv("CAROUSEL_CONTENT_MODEL", "gemini-2.0-flash")
IMAGE_MODEL = os.getenv("CAROUSEL_IMAGE_MODEL", "gemini-3-pro-image-preview")

# Square 2K images for carousel slides
IMAGE_ASPECT_RATIO = os.getenv("CAROUSEL_IMAGE_ASPECT_RATIO", "1:1")
IMAGE_SIZE = os.getenv("CAROUSEL_IMAGE_SIZE", "2K")

# GOOGLE_AI_API_KEY is accepted for .env files written for the earlier server
GOOGLE_API_KEY = os.getenv("GOOGLE_API_KEY") or os.getenv("GOOGLE_AI_API_KEY")

UPLOADS_DIR = Path(os.getenv("CAROUSEL_UPLOADS_DIR", "uploads"))


@lru_cache(maxsize=1)
def get_gemini_client() -> genai.Client:
    """Return the shared Gemini client, creating it on first use."""
    return genai.Client(api_key=GOOGLE_API_KEY)
