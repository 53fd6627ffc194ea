import logging

from openai import OpenAIError

from app.agent.artifacts import OptimizeRequest, OptimizedCode
from app.agent.base import BaseAgent
from app.agent.llm_client import EmptyResponseError, LLMClient
from app.agent.prompts.optimizer import OPTIMIZER_SYSTEM_PROMPT, OPTIMIZER_USER_PROMPT
from app.core.config import settings

logger = logging.getLogger(__name__)


class OptimizerAgent(BaseAgent[OptimizeRequest, OptimizedCode]):
    """
    Agent that rewrites generated code for quality. Runs on the stronger model and
    never fails the caller: on any provider problem the input code comes back as-is.
    """

    def __init__(self, model_name: str | None = None, llm: LLMClient | None = None):
        super().__init__(model_name=model_name or settings.MODEL_OPTIMIZER, llm=llm)

    async def run(self, input_data: OptimizeRequest) -> OptimizedCode:
        user_prompt = OPTIMIZER_USER_PROMPT.format(code_type=input_data.type, code=input_data.code)
        try:
            code = await self.llm.generate_text(OPTIMIZER_SYSTEM_PROMPT, user_prompt)
        except (OpenAIError, EmptyResponseError) as exc:
            logger.warning("Code optimization failed, returning original code: %s", exc)
            return OptimizedCode(code=input_data.code, optimized=False)
        return OptimizedCode(code=code, optimized=True)
