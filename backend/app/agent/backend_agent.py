import asyncio
import logging

from app.agent.artifacts import BackendFeatures, BackendRequest, GeneratedBackend
from app.agent.base import BaseAgent
from app.agent.llm_client import EmptyResponseError
from app.agent.prompts.backend import (
    BACKEND_SYSTEM_PROMPT,
    MIDDLEWARE_PROMPT,
    MODELS_PROMPT,
    ROUTES_PROMPT,
)

logger = logging.getLogger(__name__)


class BackendAgent(BaseAgent[BackendRequest, GeneratedBackend]):
    """
    Agent that scaffolds a backend as three files (routes, models, middleware).
    The files are independent, so they are requested concurrently; any provider
    failure fails the whole scaffold and cancels the requests still in flight.
    """

    async def _generate_file(self, kind: str, user_prompt: str) -> str:
        try:
            return await self.llm.generate_text(BACKEND_SYSTEM_PROMPT, user_prompt)
        except EmptyResponseError:
            logger.warning("Empty %s output from backend generation", kind)
            return f"// Error generating {kind}"

    async def run(self, input_data: BackendRequest) -> GeneratedBackend:
        features = ", ".join((input_data.features or BackendFeatures()).enabled()) or "none"
        params = {
            "framework": input_data.framework,
            "database": input_data.database,
            "features": features,
        }

        tasks = [
            asyncio.create_task(self._generate_file("routes", ROUTES_PROMPT.format(**params))),
            asyncio.create_task(self._generate_file("models", MODELS_PROMPT.format(**params))),
            asyncio.create_task(
                self._generate_file("middleware", MIDDLEWARE_PROMPT.format(**params))
            ),
        ]
        try:
            routes, models, middleware = await asyncio.gather(*tasks)
        except Exception:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        return GeneratedBackend(
            routes=routes,
            models=models,
            middleware=middleware,
            database=input_data.database,
            framework=input_data.framework,
        )
