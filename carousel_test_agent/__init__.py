"""Carousel Test Agent - Prompt testing harness for slide carousel generation.

This package contains the root orchestrator agent and the sub-agents a developer
uses to iterate on the prompts behind a slide carousel: one text prompt that
turns a transcript into slide content, and two image prompts that turn each
slide into an image styled after a shared reference image.

Main Components:
    - agent.py: Root orchestrator agent that manages the workflow
    - shared/: Templating, slide parsing, response normalization, storage and config
    - content_generation_agent/: Transcript -> slide content (heading + explanation)
    - image_generation_agent/: First reference image, then the remaining slide images

Usage:
    from carousel_test_agent import root_agent
    # The root_agent is configured with all sub-agents and ready to use
"""

from . import agent
from .agent import root_agent

__all__ = ["root_agent"]
