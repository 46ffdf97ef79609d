"""Image Generation Agent - Creates one image per slide.

Main Components:
    - agent.py: Agent definition and the tools for the two image stages
    - image_gen.py: Gemini image generation for the first and remaining slides

Generated images are written under uploads/carousel/ and referenced by relative URL.
"""

from . import agent
