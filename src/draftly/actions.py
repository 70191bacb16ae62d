"""Application-level helpers built on the completion client."""

import logging

from draftly.config import settings
from draftly.core.client import OpenRouterClient

logger = logging.getLogger(__name__)

FALLBACK_PROJECT_NAME = "Untitled Project"

PROJECT_NAME_PROMPT = """\
You are an AI assistant that generates very very short project names based on the user's prompt.
- Keep it under 5 words.
- Capitalize words appropriately.
- Do not include special characters.
"""


async def generate_project_name(
    prompt: str, model: str | None = None, client: OpenRouterClient | None = None
) -> str:
    """
    Return a short project name for *prompt*.

    Never raises: any failure, or an empty reply, yields :data:`FALLBACK_PROJECT_NAME`.
    """
    model = model or settings.DEFAULT_MODEL
    try:
        if client is not None:
            result = await client.generate_text(model, prompt, system=PROJECT_NAME_PROMPT)
        else:
            async with OpenRouterClient() as owned:
                result = await owned.generate_text(model, prompt, system=PROJECT_NAME_PROMPT)
    except Exception as exc:  # pylint: disable=broad-except
        logger.error("Project name generation failed: %s", exc)
        return FALLBACK_PROJECT_NAME
    return result.text.strip() or FALLBACK_PROJECT_NAME
