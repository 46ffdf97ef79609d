"""Content Generation Agent - Turns a transcript into slide content.

Main Components:
    - agent.py: Agent definition and the tools that run content generation
    - content_gen.py: Prompt templating, the Gemini text call and slide parsing

The agent saves the parsed slides to session state for the image generation agent.
"""

from . import agent
