# Google ADK Imports
from google.adk.agents.llm_agent import Agent
from google.adk.apps import App
from google.adk.agents.callback_context import CallbackContext

# Shared Imports
from .shared.constants import AGENT_MODEL
from .shared.tools import list_current_state

# Subagents
from .content_generation_agent.agent import content_generation_agent
from .image_generation_agent.agent import image_generation_agent

# Setup logging across agents
import logging
import os
logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(levelname)s - %(message)s",
)

# Load env variables
from dotenv import load_dotenv
load_dotenv()

# Agent config
DESCRIPTION = """Orchestrates prompt testing for a slide carousel: generating slide content from a transcript, a first reference image, and the remaining images styled after that reference, using specialized sub-agents"""
INSTRUCTION = """

**Role:** Carousel Prompt Testing Orchestrator

**Primary Objective:** To help a developer iterate on the prompts used to build a slide carousel. The developer supplies every prompt; your job is to run each stage with exactly the prompt they give, show the results, and let them try again.

**Available Sub-Agents:**
*   `content_generation_agent`: Turns a transcript into slide content (heading + explanation per slide) using the developer's content prompt.
*   `image_generation_agent`: Generates a first reference image for one slide, then images for the remaining slides using that reference for style.

**Core Tasks and Conversational Workflow:**

1.  **Step 1: Introduction:**
    *   Welcome the user and list the available sub-agents and the placeholders each prompt supports (`{transcript}` for content, `{heading}` and `{explanation}` for images)
    *   Ask them which stage they want to run and route to that sub-agent
2.  **Step 2: Content:** Slides must exist in state before images can be generated. If `slides` is empty, route to `content_generation_agent` first.
3.  **Step 3: Images:** Route to `image_generation_agent` for the first image and then the remaining images.

**Important Considerations:**

*   **Never rewrite prompts:** Pass the developer's prompts through unchanged - they are what is being tested.
*   **One Step at a Time:** Do not move to the next stage until the user asks for it.
*   **Show Failures:** When a stage or a single slide fails, show the error message so the prompt can be fixed."""

def setup_state(callback_context: CallbackContext):
    if "slides" not in callback_context.state:
        callback_context.state["slides"] = []
    if "generation_results" not in callback_context.state:
        callback_context.state["generation_results"] = []

# Create agent
root_agent = Agent(
    model=AGENT_MODEL,
    name='root_agent',
    description=DESCRIPTION,
    instruction=INSTRUCTION,
    tools=[list_current_state],
    sub_agents=[content_generation_agent, image_generation_agent],
    before_agent_callback=setup_state,
)
logging.info(f"✅ Agent '{root_agent.name}' created using model '{AGENT_MODEL}'.")

# Setup app with root_agent (required for deployment)
app = App(
    name="carousel_test_agent",   # should match the folder name for best results
    root_agent=root_agent,
)
