import logging

from app.agent.artifacts import ComponentRequest, GeneratedComponent
from app.agent.base import BaseAgent
from app.agent.llm_client import EmptyResponseError
from app.agent.prompts.component import COMPONENT_SYSTEM_PROMPT, COMPONENT_USER_PROMPT

logger = logging.getLogger(__name__)

EMPTY_COMPONENT_PLACEHOLDER = "// Error generating component"


class ComponentAgent(BaseAgent[ComponentRequest, GeneratedComponent]):
    """
    Agent that writes a single UI component from a type, a framework and style preferences.
    """

    async def run(self, input_data: ComponentRequest) -> GeneratedComponent:
        user_prompt = COMPONENT_USER_PROMPT.format(
            component_type=input_data.component_type,
            framework=input_data.framework,
            style_preferences=input_data.style_preferences,
        )
        try:
            code = await self.llm.generate_text(COMPONENT_SYSTEM_PROMPT, user_prompt)
        except EmptyResponseError:
            logger.warning("Empty component output for %s", input_data.component_type)
            code = EMPTY_COMPONENT_PLACEHOLDER

        return GeneratedComponent(
            code=code,
            component_type=input_data.component_type,
            framework=input_data.framework,
        )
