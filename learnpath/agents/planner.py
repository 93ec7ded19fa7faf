# learnpath/agents/planner.py
import logging

from learnpath.agents.llm.base import LLMClient
from learnpath.settings import settings

logger = logging.getLogger(__name__)


SYSTEM_PLANNER = """You are a helpful AI curriculum assistant.

Write the roadmap as Markdown.
Start every module with a "## " heading naming its level or topic
(for example "## Beginner" or "## Routing").
Put the module's objectives, resources and exercises under its heading as "- " bullet points.
"""


def build_planner_prompt(topic: str) -> str:
    return f"Create a detailed roadmap for: {topic}"


def generate_roadmap_markdown(llm: LLMClient, topic: str, temperature: float | None = None) -> str:
    """
    Ask the planner for a roadmap document. No retries: PlannerError from the
    client reaches the caller as raised.
    """
    if temperature is None:
        temperature = settings.planner_temperature

    user_prompt = build_planner_prompt(topic)
    logger.info("Requesting roadmap for topic=%r", topic)

    markdown = llm.generate_text(system=SYSTEM_PLANNER, user=user_prompt, temperature=temperature)

    logger.info("Planner returned %d characters for topic=%r", len(markdown), topic)
    return markdown
